"""Resolution of alarm specs against tiered defaults.

Every optional field resolves as: value on the alarm, then value on the
``AlarmDefaults``, then the built-in default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from apigw_monitoring.alarms.methods import (
    ManyMethods,
    MethodSelection,
    SingleMethod,
    to_method_selection,
)
from apigw_monitoring.common.constants import (
    DEFAULT_ALARM_ACTIONS_ENABLED,
    DEFAULT_ALARM_PERIOD,
    DEFAULT_DATAPOINTS_TO_ALARM,
    DEFAULT_EVALUATION_PERIODS,
    DEFAULT_METHODS,
    DEFAULT_N_STDS,
    DEFAULT_TREAT_MISSING_DATA,
    MAX_LATENCY_METHODS,
    LatencyStatistic,
    Metric,
    Statistic,
    TreatMissingData,
)
from apigw_monitoring.common.schemas import (
    AlarmDefaults,
    AlarmEvaluation,
    AlarmSpec,
    MethodsInput,
    MissingDataAlarmSpec,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ALARM_EVALUATION = AlarmEvaluation(
    evaluation_periods=DEFAULT_EVALUATION_PERIODS,
    datapoints_to_alarm=DEFAULT_DATAPOINTS_TO_ALARM,
)


class AlarmValidationError(ValueError):
    """Raised when an alarm spec and its defaults are inconsistent."""

    def __init__(self, resource: str, metric: Metric | None, reason: str) -> None:
        self.resource = resource
        self.metric = metric
        self.reason = reason
        where = f"resource={resource}"
        if metric is not None:
            where += f" metric={metric}"
        super().__init__(f"{reason} ({where})")


@dataclass(frozen=True)
class ResolvedAlarmMetric:
    """Fully resolved metric of an anomaly detection alarm."""

    resource: str
    metric: Metric
    statistic: Statistic | LatencyStatistic
    period: int
    methods: MethodSelection


@dataclass(frozen=True)
class ResolvedMissingDataMetric:
    """Fully resolved metric of a missing data alarm."""

    resource: str
    methods: MethodSelection
    period: int


def first_present(*values: T | None) -> T | None:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _defaults_field(defaults: AlarmDefaults | None, name: str) -> Any:
    return getattr(defaults, name) if defaults is not None else None


def _resolve_methods(
    spec: AlarmSpec | MissingDataAlarmSpec, defaults: AlarmDefaults | None
) -> MethodSelection:
    methods: MethodsInput = first_present(
        spec.methods, _defaults_field(defaults, "methods"), list(DEFAULT_METHODS)
    )
    return to_method_selection(methods)


def _require_unique_methods(
    resource: str, metric: Metric | None, selection: MethodSelection
) -> None:
    if isinstance(selection, ManyMethods) and len(set(selection.methods)) != len(selection):
        raise AlarmValidationError(resource, metric, "methods must be unique")


def _validate_alarm(spec: AlarmSpec, defaults: AlarmDefaults | None) -> None:
    is_latency = spec.metric == Metric.LATENCY

    declared = first_present(spec.methods, _defaults_field(defaults, "methods"))
    if is_latency and isinstance(declared, list) and len(declared) > MAX_LATENCY_METHODS:
        raise AlarmValidationError(
            spec.resource,
            spec.metric,
            f"methods must be {MAX_LATENCY_METHODS} or fewer for latency statistics",
        )

    selection = _resolve_methods(spec, defaults)
    if spec.latency_metric_statistic is not None:
        if not is_latency:
            raise AlarmValidationError(
                spec.resource,
                spec.metric,
                "latency statistic override only valid for latency metric",
            )
        if not isinstance(selection, SingleMethod):
            raise AlarmValidationError(
                spec.resource,
                spec.metric,
                "latency statistic override requires exactly one method",
            )

    _require_unique_methods(spec.resource, spec.metric, selection)


def _select_statistic(spec: AlarmSpec) -> Statistic | LatencyStatistic:
    if spec.latency_metric_statistic is not None:
        return spec.latency_metric_statistic
    if spec.metric == Metric.LATENCY:
        return Statistic.AVERAGE
    return Statistic.SUM


def resolve_alarm_metric(
    spec: AlarmSpec, defaults: AlarmDefaults | None = None
) -> ResolvedAlarmMetric:
    """Validate an alarm spec and resolve its metric.

    Raises:
        AlarmValidationError: if the method selection does not fit the
            metric or the latency statistic override, or repeats a method.
    """
    _validate_alarm(spec, defaults)

    resolved = ResolvedAlarmMetric(
        resource=spec.resource,
        metric=spec.metric,
        statistic=_select_statistic(spec),
        period=first_present(spec.period, _defaults_field(defaults, "period"), DEFAULT_ALARM_PERIOD),
        methods=_resolve_methods(spec, defaults),
    )
    logger.debug("Resolved alarm metric: %s", resolved)
    return resolved


def resolve_missing_data_metric(
    spec: MissingDataAlarmSpec, defaults: AlarmDefaults | None = None
) -> ResolvedMissingDataMetric:
    """Resolve the metric of a missing data alarm.

    Raises:
        AlarmValidationError: if a method is listed twice.
    """
    methods = _resolve_methods(spec, defaults)
    _require_unique_methods(spec.resource, None, methods)
    return ResolvedMissingDataMetric(
        resource=spec.resource,
        methods=methods,
        period=first_present(spec.period, _defaults_field(defaults, "period"), DEFAULT_ALARM_PERIOD),
    )


def resolve_n_stds(spec: AlarmSpec, defaults: AlarmDefaults | None = None) -> float:
    return first_present(spec.n_stds, _defaults_field(defaults, "n_stds"), DEFAULT_N_STDS)


def resolve_evaluation(
    spec: AlarmSpec | MissingDataAlarmSpec, defaults: AlarmDefaults | None = None
) -> AlarmEvaluation:
    return first_present(
        spec.evaluation, _defaults_field(defaults, "evaluation"), DEFAULT_ALARM_EVALUATION
    )


def resolve_treat_missing_data(
    spec: AlarmSpec, defaults: AlarmDefaults | None = None
) -> TreatMissingData:
    return first_present(
        spec.treat_missing_data,
        _defaults_field(defaults, "treat_missing_data"),
        DEFAULT_TREAT_MISSING_DATA,
    )


def resolve_enabled(
    spec: AlarmSpec | MissingDataAlarmSpec, defaults: AlarmDefaults | None = None
) -> bool:
    return first_present(
        spec.enabled, _defaults_field(defaults, "enabled"), DEFAULT_ALARM_ACTIONS_ENABLED
    )


__all__ = [
    "AlarmValidationError",
    "ResolvedAlarmMetric",
    "ResolvedMissingDataMetric",
    "DEFAULT_ALARM_EVALUATION",
    "first_present",
    "resolve_alarm_metric",
    "resolve_missing_data_metric",
    "resolve_n_stds",
    "resolve_evaluation",
    "resolve_treat_missing_data",
    "resolve_enabled",
]
