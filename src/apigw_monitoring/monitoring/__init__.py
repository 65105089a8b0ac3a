"""Monitoring wiring: provisioning port, template recorder and service."""

from __future__ import annotations

from apigw_monitoring.monitoring.ports import AlarmWidget, MonitoringPort
from apigw_monitoring.monitoring.service import (
    ApiGatewayMonitoring,
    MonitoringResult,
    render_template,
)
from apigw_monitoring.monitoring.template import TemplateRecorder

__all__ = [
    "AlarmWidget",
    "ApiGatewayMonitoring",
    "MonitoringPort",
    "MonitoringResult",
    "TemplateRecorder",
    "render_template",
]
