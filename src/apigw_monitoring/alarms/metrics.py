"""Metric query synthesis for API Gateway alarms.

Builds the ordered metric data queries of an alarm: per-method statistic
queries, the derived expression evaluated by the alarm (``m``) and the
anomaly detection band used as its threshold (``ad``).

Multi-method alarms combine their methods as follows:
- Count and error metrics: sum of per-method ``Sum`` statistics
- Latency: per-method ``Average`` weighted by ``SampleCount``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from apigw_monitoring.alarms.methods import ManyMethods, SingleMethod
from apigw_monitoring.alarms.resolver import ResolvedAlarmMetric, ResolvedMissingDataMetric
from apigw_monitoring.common.constants import (
    API_GATEWAY_NAMESPACE,
    HttpMethod,
    LatencyStatistic,
    Metric,
    Statistic,
)
from apigw_monitoring.common.schemas import ApiGateway

logger = logging.getLogger(__name__)

EVALUATION_METRIC_ID = "m"
THRESHOLD_METRIC_ID = "ad"


# --- Data Classes ---


@dataclass(frozen=True)
class Dimension:
    name: str
    value: str


@dataclass(frozen=True)
class MetricStat:
    """A statistic of one API Gateway metric over a dimension set."""

    namespace: str
    metric_name: Metric
    dimensions: tuple[Dimension, ...]
    period: int
    stat: Statistic | LatencyStatistic

    def to_properties(self) -> dict[str, Any]:
        return {
            "Metric": {
                "Namespace": self.namespace,
                "MetricName": str(self.metric_name),
                "Dimensions": [{"Name": d.name, "Value": d.value} for d in self.dimensions],
            },
            "Period": self.period,
            "Stat": str(self.stat),
        }


@dataclass(frozen=True)
class MetricQuery:
    """One entry of an alarm's metric graph.

    Exactly one of ``metric_stat`` and ``expression`` is set.
    """

    id: str
    return_data: bool = False
    metric_stat: MetricStat | None = None
    expression: str | None = None

    def __post_init__(self) -> None:
        if (self.metric_stat is None) == (self.expression is None):
            raise ValueError(f"metric query {self.id!r} needs exactly one of metric_stat or expression")

    @property
    def is_expression(self) -> bool:
        return self.expression is not None

    def to_properties(self) -> dict[str, Any]:
        """Render as a CloudFormation ``MetricDataQuery``."""
        props: dict[str, Any] = {"Id": self.id}
        if self.expression is not None:
            props["Expression"] = self.expression
        else:
            props["MetricStat"] = self.metric_stat.to_properties()
        # Band expressions leave ReturnData unset
        if self.return_data or self.metric_stat is not None:
            props["ReturnData"] = self.return_data
        return props


@dataclass(frozen=True)
class AlarmMetrics:
    """Metric queries of an anomaly detection alarm."""

    threshold_metric_id: str
    metrics: tuple[MetricQuery, ...]

    def get(self, metric_id: str) -> MetricQuery:
        for query in self.metrics:
            if query.id == metric_id:
                return query
        raise KeyError(metric_id)


def format_number(value: float) -> str:
    """Format a number for a metric math expression (``3.0`` -> ``3``)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def anomaly_detection_band(metric_id: str, n_stds: float) -> str:
    return f"ANOMALY_DETECTION_BAND({metric_id}, {format_number(n_stds)})"


# --- Alarm Metric Factory ---


class AlarmMetricFactory:
    """Synthesizes metric queries for alarms on one API Gateway stage."""

    def __init__(self, api_gateway: ApiGateway, namespace: str = API_GATEWAY_NAMESPACE) -> None:
        self._api_gateway = api_gateway
        self._namespace = namespace

    @property
    def api_gateway(self) -> ApiGateway:
        return self._api_gateway

    def method_query(
        self,
        query_id: str,
        return_data: bool,
        *,
        resource: str,
        metric: Metric,
        method: HttpMethod,
        period: int,
        statistic: Statistic | LatencyStatistic,
    ) -> MetricQuery:
        """Leaf query of one statistic for one resource method."""
        dimensions = (
            Dimension("ApiName", self._api_gateway.api_name),
            Dimension("Resource", resource),
            Dimension("Stage", self._api_gateway.stage),
            Dimension("Method", str(method)),
        )
        return MetricQuery(
            id=query_id,
            return_data=return_data,
            metric_stat=MetricStat(
                namespace=self._namespace,
                metric_name=metric,
                dimensions=dimensions,
                period=period,
                stat=statistic,
            ),
        )

    def synthesize(self, metric: ResolvedAlarmMetric, n_stds: float) -> AlarmMetrics:
        """Build the metric queries of an anomaly detection alarm."""
        if isinstance(metric.methods, SingleMethod):
            alarm_metrics = self._single_method(metric, metric.methods.method, n_stds)
        elif metric.metric == Metric.LATENCY:
            alarm_metrics = self._weighted_average(metric, metric.methods, n_stds)
        else:
            alarm_metrics = self._sum(metric, metric.methods, n_stds)

        logger.debug(
            "Synthesized %d metric queries for %s %s",
            len(alarm_metrics.metrics),
            metric.resource,
            metric.metric,
        )
        return alarm_metrics

    def synthesize_missing_data(self, metric: ResolvedMissingDataMetric) -> tuple[MetricQuery, ...]:
        """Build the request sample count queries of a missing data alarm."""
        if isinstance(metric.methods, SingleMethod):
            return (
                self._count_query(EVALUATION_METRIC_ID, True, metric, metric.methods.method),
            )

        methods = metric.methods.methods
        count_ids = [f"count{method}" for method in methods]
        return (
            MetricQuery(
                id=EVALUATION_METRIC_ID,
                return_data=True,
                expression=" + ".join(count_ids),
            ),
            *(
                self._count_query(query_id, False, metric, method)
                for query_id, method in zip(count_ids, methods)
            ),
        )

    def _count_query(
        self,
        query_id: str,
        return_data: bool,
        metric: ResolvedMissingDataMetric,
        method: HttpMethod,
    ) -> MetricQuery:
        return self.method_query(
            query_id,
            return_data,
            resource=metric.resource,
            metric=Metric.COUNT,
            method=method,
            period=metric.period,
            statistic=Statistic.SAMPLE_COUNT,
        )

    def _leaf(
        self,
        query_id: str,
        metric: ResolvedAlarmMetric,
        method: HttpMethod,
        statistic: Statistic | LatencyStatistic,
        return_data: bool = False,
    ) -> MetricQuery:
        return self.method_query(
            query_id,
            return_data,
            resource=metric.resource,
            metric=metric.metric,
            method=method,
            period=metric.period,
            statistic=statistic,
        )

    def _band(self, n_stds: float) -> MetricQuery:
        return MetricQuery(
            id=THRESHOLD_METRIC_ID,
            expression=anomaly_detection_band(EVALUATION_METRIC_ID, n_stds),
        )

    def _single_method(
        self, metric: ResolvedAlarmMetric, method: HttpMethod, n_stds: float
    ) -> AlarmMetrics:
        return AlarmMetrics(
            threshold_metric_id=THRESHOLD_METRIC_ID,
            metrics=(
                self._band(n_stds),
                self._leaf(EVALUATION_METRIC_ID, metric, method, metric.statistic, return_data=True),
            ),
        )

    def _sum(self, metric: ResolvedAlarmMetric, methods: ManyMethods, n_stds: float) -> AlarmMetrics:
        sum_ids = [f"{Statistic.SUM}_{method}" for method in methods.methods]
        return AlarmMetrics(
            threshold_metric_id=THRESHOLD_METRIC_ID,
            metrics=(
                self._band(n_stds),
                MetricQuery(
                    id=EVALUATION_METRIC_ID,
                    return_data=True,
                    expression=" + ".join(sum_ids),
                ),
                *(
                    self._leaf(query_id, metric, method, Statistic.SUM)
                    for query_id, method in zip(sum_ids, methods.methods)
                ),
            ),
        )

    def _weighted_average(
        self, metric: ResolvedAlarmMetric, methods: ManyMethods, n_stds: float
    ) -> AlarmMetrics:
        avg_ids = [f"{Statistic.AVERAGE}_{method}" for method in methods.methods]
        count_ids = [f"{Statistic.SAMPLE_COUNT}_{method}" for method in methods.methods]

        numerator = " + ".join(f"{avg} * {count}" for avg, count in zip(avg_ids, count_ids))
        denominator = " + ".join(count_ids)

        return AlarmMetrics(
            threshold_metric_id=THRESHOLD_METRIC_ID,
            metrics=(
                self._band(n_stds),
                MetricQuery(
                    id=EVALUATION_METRIC_ID,
                    return_data=True,
                    expression=f"({numerator}) / ({denominator})",
                ),
                *(
                    self._leaf(query_id, metric, method, Statistic.AVERAGE)
                    for query_id, method in zip(avg_ids, methods.methods)
                ),
                *(
                    self._leaf(query_id, metric, method, Statistic.SAMPLE_COUNT)
                    for query_id, method in zip(count_ids, methods.methods)
                ),
            ),
        )


__all__ = [
    "EVALUATION_METRIC_ID",
    "THRESHOLD_METRIC_ID",
    "Dimension",
    "MetricStat",
    "MetricQuery",
    "AlarmMetrics",
    "AlarmMetricFactory",
    "anomaly_detection_band",
    "format_number",
]
