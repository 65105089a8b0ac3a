"""Alarm definitions assembled from resolved metrics.

An ``AlarmDefinition`` carries everything a provisioning layer needs to
create one ``AWS::CloudWatch::Alarm``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from apigw_monitoring.alarms.comparison import (
    MISSING_DATA_COMPARISON,
    MISSING_DATA_THRESHOLD,
    MISSING_DATA_TREATMENT,
    select_comparison_operator,
)
from apigw_monitoring.alarms.metrics import AlarmMetricFactory, MetricQuery
from apigw_monitoring.alarms.resolver import ResolvedAlarmMetric, ResolvedMissingDataMetric
from apigw_monitoring.common.constants import (
    API_GATEWAY_NAMESPACE,
    ComparisonOperator,
    TreatMissingData,
)
from apigw_monitoring.common.schemas import AlarmEvaluation, ApiGateway

logger = logging.getLogger(__name__)

# ARN string or a CloudFormation intrinsic such as {"Ref": ...}
ResourceRef = str | dict[str, Any]


@dataclass(frozen=True)
class AlarmDefinition:
    """A CloudWatch alarm ready to be provisioned."""

    logical_name: str
    alarm_name: str
    alarm_description: str
    widget_title: str
    metrics: tuple[MetricQuery, ...]
    comparison_operator: ComparisonOperator
    treat_missing_data: TreatMissingData
    evaluation_periods: int
    datapoints_to_alarm: int
    alarm_actions: tuple[ResourceRef, ...] = ()
    threshold_metric_id: str | None = None
    threshold: float | None = None

    @property
    def is_anomaly_detection(self) -> bool:
        return self.threshold_metric_id is not None

    def to_properties(self) -> dict[str, Any]:
        """Render as CloudFormation ``AWS::CloudWatch::Alarm`` properties."""
        props: dict[str, Any] = {
            "AlarmName": self.alarm_name,
            "AlarmDescription": self.alarm_description,
            "AlarmActions": list(self.alarm_actions),
            "Metrics": [query.to_properties() for query in self.metrics],
            "ComparisonOperator": str(self.comparison_operator),
            "TreatMissingData": str(self.treat_missing_data),
            "EvaluationPeriods": self.evaluation_periods,
            "DatapointsToAlarm": self.datapoints_to_alarm,
        }
        if self.threshold_metric_id is not None:
            props["ThresholdMetricId"] = self.threshold_metric_id
        if self.threshold is not None:
            props["Threshold"] = self.threshold
        return props


class AlarmFactory:
    """Creates alarm definitions for one API Gateway stage."""

    def __init__(self, api_gateway: ApiGateway, namespace: str = API_GATEWAY_NAMESPACE) -> None:
        self._metric_factory = AlarmMetricFactory(api_gateway, namespace)

    def create_alarm(
        self,
        metric: ResolvedAlarmMetric,
        n_stds: float,
        evaluation: AlarmEvaluation,
        treat_missing_data: TreatMissingData,
        action_topic: ResourceRef | None = None,
    ) -> AlarmDefinition:
        """Anomaly detection alarm on a resolved metric."""
        alarm_metrics = self._metric_factory.synthesize(metric, n_stds)
        label = f"{metric.resource} {metric.metric} {metric.statistic}"

        definition = AlarmDefinition(
            logical_name=f"{label} alarm",
            alarm_name=f"ALARM: {label}",
            alarm_description=(
                f"resource: {metric.resource}, metric: {metric.metric}, stats: {metric.statistic}."
            ),
            widget_title=label,
            metrics=alarm_metrics.metrics,
            threshold_metric_id=alarm_metrics.threshold_metric_id,
            comparison_operator=select_comparison_operator(metric.metric),
            treat_missing_data=treat_missing_data,
            evaluation_periods=evaluation.evaluation_periods,
            datapoints_to_alarm=evaluation.datapoints_to_alarm,
            alarm_actions=(action_topic,) if action_topic is not None else (),
        )
        logger.debug("Created alarm definition %s", definition.alarm_name)
        return definition

    def create_missing_data_alarm(
        self,
        metric: ResolvedMissingDataMetric,
        evaluation: AlarmEvaluation,
        action_topic: ResourceRef | None = None,
    ) -> AlarmDefinition:
        """Alarm on a resource receiving no requests."""
        definition = AlarmDefinition(
            logical_name=f"{metric.resource} missing data points alarm",
            alarm_name=f"MISSING ALARM: {metric.resource}",
            alarm_description=f"resource: {metric.resource}",
            widget_title=f"{metric.resource} missing data points",
            metrics=self._metric_factory.synthesize_missing_data(metric),
            threshold=MISSING_DATA_THRESHOLD,
            comparison_operator=MISSING_DATA_COMPARISON,
            treat_missing_data=MISSING_DATA_TREATMENT,
            evaluation_periods=evaluation.evaluation_periods,
            datapoints_to_alarm=evaluation.datapoints_to_alarm,
            alarm_actions=(action_topic,) if action_topic is not None else (),
        )
        logger.debug("Created missing data alarm definition %s", definition.alarm_name)
        return definition


__all__ = ["ResourceRef", "AlarmDefinition", "AlarmFactory"]
