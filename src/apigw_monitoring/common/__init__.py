"""Common constants, schemas and configuration for apigw_monitoring."""

from apigw_monitoring.common.config import MonitoringConfig
from apigw_monitoring.common.constants import (
    ComparisonOperator,
    HttpMethod,
    LatencyStatistic,
    Metric,
    Statistic,
    TreatMissingData,
)
from apigw_monitoring.common.schemas import (
    AlarmDefaults,
    AlarmEvaluation,
    AlarmSpec,
    ApiGateway,
    MissingDataAlarmSpec,
    MonitoringProps,
)

__all__ = [
    "Metric",
    "HttpMethod",
    "Statistic",
    "LatencyStatistic",
    "TreatMissingData",
    "ComparisonOperator",
    "AlarmEvaluation",
    "ApiGateway",
    "AlarmDefaults",
    "AlarmSpec",
    "MissingDataAlarmSpec",
    "MonitoringProps",
    "MonitoringConfig",
]
