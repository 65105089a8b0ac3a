"""Pydantic v2 schemas for declarative alarm configuration.

Field names are snake_case; the camelCase keys of JSON/YAML monitoring
configs (``latencyMetricStatistic``, ``nStds``, ``apiName``...) are accepted
as aliases.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from apigw_monitoring.common.constants import (
    HttpMethod,
    LatencyStatistic,
    Metric,
    TreatMissingData,
)

# A scalar method and a list of methods are distinct shapes
MethodsInput = HttpMethod | Annotated[list[HttpMethod], Field(min_length=1)]


class _ConfigModel(BaseModel):
    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "forbid",
    }


class AlarmEvaluation(_ConfigModel):
    """Evaluation window of an alarm.

    ``datapoints_to_alarm`` is allowed to exceed ``evaluation_periods``.
    """

    evaluation_periods: int = Field(ge=1)
    datapoints_to_alarm: int = Field(ge=1)


class ApiGateway(_ConfigModel):
    """Identity of the monitored REST API."""

    api_name: str = Field(min_length=1)
    stage: str = Field(min_length=1)


class AlarmDefaults(_ConfigModel):
    """Fallback values applied to every alarm that leaves a field unset."""

    enabled: bool | None = None
    methods: MethodsInput | None = None
    period: int | None = Field(default=None, gt=0)
    evaluation: AlarmEvaluation | None = None
    n_stds: float | None = Field(default=None, gt=0)
    treat_missing_data: TreatMissingData | None = None


class AlarmSpec(_ConfigModel):
    """Anomaly detection alarm on one metric of one API resource."""

    resource: str = Field(min_length=1)
    metric: Metric
    enabled: bool | None = None
    methods: MethodsInput | None = None
    period: int | None = Field(default=None, gt=0)
    evaluation: AlarmEvaluation | None = None
    n_stds: float | None = Field(default=None, gt=0)
    treat_missing_data: TreatMissingData | None = None
    latency_metric_statistic: LatencyStatistic | None = None


class MissingDataAlarmSpec(_ConfigModel):
    """Alarm raised when a resource stops receiving requests."""

    resource: str = Field(min_length=1)
    enabled: bool | None = None
    methods: MethodsInput | None = None
    period: int | None = Field(default=None, gt=0)
    evaluation: AlarmEvaluation | None = None


class MonitoringProps(_ConfigModel):
    """Complete monitoring configuration for one API stage."""

    api_gateway: ApiGateway
    alarms: list[AlarmSpec] = Field(default_factory=list)
    alarm_defaults: AlarmDefaults | None = None
    missing_data_alarms: list[MissingDataAlarmSpec] = Field(default_factory=list)
    sns_email_address: str | None = None


__all__ = [
    "MethodsInput",
    "AlarmEvaluation",
    "ApiGateway",
    "AlarmDefaults",
    "AlarmSpec",
    "MissingDataAlarmSpec",
    "MonitoringProps",
]
