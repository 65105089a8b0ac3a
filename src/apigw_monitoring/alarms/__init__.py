"""Alarm parameter resolution, metric synthesis and alarm definitions."""

from __future__ import annotations

from apigw_monitoring.alarms.comparison import select_comparison_operator
from apigw_monitoring.alarms.factory import AlarmDefinition, AlarmFactory
from apigw_monitoring.alarms.methods import ManyMethods, MethodSelection, SingleMethod
from apigw_monitoring.alarms.metrics import (
    AlarmMetricFactory,
    AlarmMetrics,
    Dimension,
    MetricQuery,
    MetricStat,
)
from apigw_monitoring.alarms.resolver import (
    AlarmValidationError,
    ResolvedAlarmMetric,
    ResolvedMissingDataMetric,
    resolve_alarm_metric,
    resolve_missing_data_metric,
)

__all__ = [
    "AlarmDefinition",
    "AlarmFactory",
    "AlarmMetricFactory",
    "AlarmMetrics",
    "AlarmValidationError",
    "Dimension",
    "ManyMethods",
    "MethodSelection",
    "MetricQuery",
    "MetricStat",
    "ResolvedAlarmMetric",
    "ResolvedMissingDataMetric",
    "SingleMethod",
    "resolve_alarm_metric",
    "resolve_missing_data_metric",
    "select_comparison_operator",
]
