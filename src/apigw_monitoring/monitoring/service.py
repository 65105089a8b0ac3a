"""API Gateway monitoring service.

Turns a ``MonitoringProps`` configuration into alarms, dashboard widgets and
an alarm notification topic, provisioned through a ``MonitoringPort``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from apigw_monitoring.alarms.factory import AlarmDefinition, AlarmFactory, ResourceRef
from apigw_monitoring.alarms.resolver import (
    resolve_alarm_metric,
    resolve_enabled,
    resolve_evaluation,
    resolve_missing_data_metric,
    resolve_n_stds,
    resolve_treat_missing_data,
)
from apigw_monitoring.common.config import MonitoringConfig
from apigw_monitoring.common.schemas import (
    AlarmDefaults,
    AlarmSpec,
    MissingDataAlarmSpec,
    MonitoringProps,
)
from apigw_monitoring.monitoring.ports import AlarmWidget, MonitoringPort
from apigw_monitoring.monitoring.template import TemplateRecorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonitoringResult:
    """Everything provisioned for one configuration."""

    topic: ResourceRef
    alarms: tuple[AlarmDefinition, ...]
    missing_data_alarms: tuple[AlarmDefinition, ...]
    widgets: tuple[AlarmWidget, ...]

    def get_stats(self) -> dict[str, Any]:
        return {
            "alarms_total": len(self.alarms) + len(self.missing_data_alarms),
            "anomaly_alarms": len(self.alarms),
            "missing_data_alarms": len(self.missing_data_alarms),
            "alarms_with_actions": sum(
                1 for a in (*self.alarms, *self.missing_data_alarms) if a.alarm_actions
            ),
            "widgets": len(self.widgets),
        }


class ApiGatewayMonitoring:
    """Provisions API Gateway alarms through a monitoring port."""

    def __init__(self, port: MonitoringPort, config: MonitoringConfig | None = None) -> None:
        self._port = port
        self._config = config or MonitoringConfig()

    @property
    def config(self) -> MonitoringConfig:
        return self._config

    def build(self, props: MonitoringProps) -> MonitoringResult:
        """Provision topic, dashboard and every declared alarm.

        Alarms are processed in declaration order. An invalid alarm raises
        ``AlarmValidationError`` and aborts the build.
        """
        topic = self._port.create_topic(self._config.topic_display_name)
        if props.sns_email_address:
            self._port.add_email_subscription(topic, props.sns_email_address)

        self._port.create_dashboard(self._config.dashboard_name)

        factory = AlarmFactory(props.api_gateway, self._config.namespace)
        defaults = props.alarm_defaults

        alarms = tuple(
            self._create_alarm(factory, alarm, defaults, topic) for alarm in props.alarms
        )
        missing_data_alarms = tuple(
            self._create_missing_data_alarm(factory, alarm, defaults, topic)
            for alarm in props.missing_data_alarms
        )

        widgets: list[AlarmWidget] = []
        for definition, alarm_ref in (*alarms, *missing_data_alarms):
            widget = AlarmWidget(title=f"{definition.widget_title} alarm", alarm=alarm_ref)
            self._port.add_alarm_widget(widget)
            widgets.append(widget)

        result = MonitoringResult(
            topic=topic,
            alarms=tuple(definition for definition, _ in alarms),
            missing_data_alarms=tuple(definition for definition, _ in missing_data_alarms),
            widgets=tuple(widgets),
        )
        logger.info(
            "Built monitoring for %s/%s: %s",
            props.api_gateway.api_name,
            props.api_gateway.stage,
            result.get_stats(),
        )
        return result

    def _create_alarm(
        self,
        factory: AlarmFactory,
        alarm: AlarmSpec,
        defaults: AlarmDefaults | None,
        topic: ResourceRef,
    ) -> tuple[AlarmDefinition, ResourceRef]:
        definition = factory.create_alarm(
            resolve_alarm_metric(alarm, defaults),
            resolve_n_stds(alarm, defaults),
            resolve_evaluation(alarm, defaults),
            resolve_treat_missing_data(alarm, defaults),
            topic if resolve_enabled(alarm, defaults) else None,
        )
        return definition, self._port.record_alarm_definition(definition)

    def _create_missing_data_alarm(
        self,
        factory: AlarmFactory,
        alarm: MissingDataAlarmSpec,
        defaults: AlarmDefaults | None,
        topic: ResourceRef,
    ) -> tuple[AlarmDefinition, ResourceRef]:
        definition = factory.create_missing_data_alarm(
            resolve_missing_data_metric(alarm, defaults),
            resolve_evaluation(alarm, defaults),
            topic if resolve_enabled(alarm, defaults) else None,
        )
        return definition, self._port.record_alarm_definition(definition)


def render_template(props: MonitoringProps, config: MonitoringConfig | None = None) -> dict[str, Any]:
    """Render a configuration as a CloudFormation template document."""
    recorder = TemplateRecorder()
    ApiGatewayMonitoring(recorder, config).build(props)
    return recorder.to_dict()


__all__ = ["ApiGatewayMonitoring", "MonitoringResult", "render_template"]
