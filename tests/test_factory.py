"""Tests for alarm definitions and comparison selection."""

from __future__ import annotations

from apigw_monitoring.alarms.comparison import (
    MISSING_DATA_COMPARISON,
    MISSING_DATA_THRESHOLD,
    MISSING_DATA_TREATMENT,
    select_comparison_operator,
)
from apigw_monitoring.alarms.factory import AlarmFactory
from apigw_monitoring.alarms.resolver import (
    DEFAULT_ALARM_EVALUATION,
    resolve_alarm_metric,
    resolve_missing_data_metric,
)
from apigw_monitoring.common.constants import ComparisonOperator, Metric, TreatMissingData
from apigw_monitoring.common.schemas import (
    AlarmEvaluation,
    AlarmSpec,
    ApiGateway,
    MissingDataAlarmSpec,
)

API = ApiGateway(api_name="dummyApiName", stage="dummyStage")
TOPIC = {"Ref": "AlarmTopic"}


def _alarm(metric: str = "4XXError", **overrides: object):
    spec = AlarmSpec(metric=metric, resource="dummy", **overrides)
    return AlarmFactory(API).create_alarm(
        resolve_alarm_metric(spec),
        3,
        DEFAULT_ALARM_EVALUATION,
        TreatMissingData.NOT_BREACHING,
    )


# --- Comparison ---


def test_count_alarms_on_both_sides():
    assert (
        select_comparison_operator(Metric.COUNT)
        == ComparisonOperator.LESS_THAN_LOWER_OR_GREATER_THAN_UPPER_THRESHOLD
    )


def test_other_metrics_alarm_above_band():
    for metric in (Metric.ERROR_4XX, Metric.ERROR_5XX, Metric.LATENCY):
        assert select_comparison_operator(metric) == ComparisonOperator.GREATER_THAN_UPPER_THRESHOLD


def test_missing_data_settings():
    assert MISSING_DATA_THRESHOLD == 1
    assert MISSING_DATA_COMPARISON == "LessThanThreshold"
    assert MISSING_DATA_TREATMENT == "breaching"


# --- Anomaly detection alarms ---


class TestCreateAlarm:
    def test_naming(self) -> None:
        definition = _alarm("Count")
        assert definition.alarm_name == "ALARM: dummy Count Sum"
        assert definition.alarm_description == "resource: dummy, metric: Count, stats: Sum."
        assert definition.widget_title == "dummy Count Sum"
        assert definition.logical_name == "dummy Count Sum alarm"

    def test_latency_percentile_in_name(self) -> None:
        definition = _alarm("Latency", methods="GET", latency_metric_statistic="p95")
        assert definition.alarm_name == "ALARM: dummy Latency p95"

    def test_threshold_metric(self) -> None:
        definition = _alarm()
        assert definition.is_anomaly_detection
        assert definition.threshold_metric_id == "ad"
        assert definition.threshold is None
        assert len(definition.metrics) == 7

    def test_comparison_per_metric(self) -> None:
        assert _alarm("Count").comparison_operator == (
            ComparisonOperator.LESS_THAN_LOWER_OR_GREATER_THAN_UPPER_THRESHOLD
        )
        assert _alarm("5XXError").comparison_operator == ComparisonOperator.GREATER_THAN_UPPER_THRESHOLD

    def test_no_actions_without_topic(self) -> None:
        assert _alarm().alarm_actions == ()

    def test_actions_with_topic(self) -> None:
        spec = AlarmSpec(metric="Count", resource="dummy")
        definition = AlarmFactory(API).create_alarm(
            resolve_alarm_metric(spec),
            3,
            AlarmEvaluation(evaluation_periods=4, datapoints_to_alarm=5),
            TreatMissingData.IGNORE,
            TOPIC,
        )
        assert definition.alarm_actions == (TOPIC,)
        assert definition.evaluation_periods == 4
        assert definition.datapoints_to_alarm == 5
        assert definition.treat_missing_data == TreatMissingData.IGNORE

    def test_properties(self) -> None:
        props = _alarm("5XXError", methods="GET").to_properties()
        assert props["AlarmName"] == "ALARM: dummy 5XXError Sum"
        assert props["AlarmActions"] == []
        assert props["ThresholdMetricId"] == "ad"
        assert "Threshold" not in props
        assert props["ComparisonOperator"] == "GreaterThanUpperThreshold"
        assert props["TreatMissingData"] == "notBreaching"
        assert props["EvaluationPeriods"] == 1
        assert props["DatapointsToAlarm"] == 1
        assert [m["Id"] for m in props["Metrics"]] == ["ad", "m"]


# --- Missing data alarms ---


class TestCreateMissingDataAlarm:
    def _definition(self, **overrides: object):
        spec = MissingDataAlarmSpec(resource="dummy", **overrides)
        return AlarmFactory(API).create_missing_data_alarm(
            resolve_missing_data_metric(spec), DEFAULT_ALARM_EVALUATION
        )

    def test_fixed_threshold(self) -> None:
        definition = self._definition()
        assert not definition.is_anomaly_detection
        assert definition.threshold == 1
        assert definition.comparison_operator == ComparisonOperator.LESS_THAN_THRESHOLD
        assert definition.treat_missing_data == TreatMissingData.BREACHING

    def test_naming(self) -> None:
        definition = self._definition()
        assert definition.alarm_name == "MISSING ALARM: dummy"
        assert definition.alarm_description == "resource: dummy"
        assert definition.widget_title == "dummy missing data points"

    def test_metrics(self) -> None:
        assert len(self._definition().metrics) == 6
        assert [m.id for m in self._definition(methods="GET").metrics] == ["m"]

    def test_properties(self) -> None:
        props = self._definition().to_properties()
        assert props["Threshold"] == 1
        assert "ThresholdMetricId" not in props
        assert props["ComparisonOperator"] == "LessThanThreshold"
        assert props["TreatMissingData"] == "breaching"
