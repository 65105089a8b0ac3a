"""Tests for alarm configuration schemas."""

import pytest
from pydantic import ValidationError

from apigw_monitoring.common.constants import (
    HttpMethod,
    LatencyStatistic,
    Metric,
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


class TestEnums:
    def test_metric_values(self) -> None:
        assert {m.value for m in Metric} == {"5XXError", "4XXError", "Count", "Latency"}

    def test_treat_missing_data_values(self) -> None:
        assert TreatMissingData.NOT_BREACHING == "notBreaching"
        assert TreatMissingData("breaching") == TreatMissingData.BREACHING

    def test_latency_statistic_from_string(self) -> None:
        assert LatencyStatistic("p95") == LatencyStatistic.P95


class TestAlarmSpec:
    def test_minimal_spec(self) -> None:
        spec = AlarmSpec(metric="Count", resource="dummy")
        assert spec.metric == Metric.COUNT
        assert spec.methods is None
        assert spec.latency_metric_statistic is None

    def test_scalar_method_stays_scalar(self) -> None:
        spec = AlarmSpec(metric="Latency", resource="dummy", methods="GET")
        assert spec.methods == HttpMethod.GET
        assert not isinstance(spec.methods, list)

    def test_single_item_list_stays_list(self) -> None:
        spec = AlarmSpec(metric="Latency", resource="dummy", methods=["GET"])
        assert spec.methods == [HttpMethod.GET]

    def test_camel_case_keys(self) -> None:
        spec = AlarmSpec.model_validate(
            {
                "metric": "Latency",
                "resource": "dummy",
                "methods": "GET",
                "latencyMetricStatistic": "p95",
                "nStds": 4,
                "treatMissingData": "ignore",
                "evaluation": {"evaluationPeriods": 2, "datapointsToAlarm": 1},
            }
        )
        assert spec.latency_metric_statistic == LatencyStatistic.P95
        assert spec.n_stds == 4
        assert spec.treat_missing_data == TreatMissingData.IGNORE
        assert spec.evaluation.evaluation_periods == 2

    def test_unknown_metric_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AlarmSpec(metric="Throttles", resource="dummy")

    def test_unknown_method_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AlarmSpec(metric="Count", resource="dummy", methods=["GET", "TRACE"])

    def test_non_positive_period_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AlarmSpec(metric="Count", resource="dummy", period=0)

    def test_empty_method_list_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AlarmSpec(metric="Latency", resource="dummy", methods=[])

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AlarmSpec(metric="Count", resource="dummy", threshold=10)

    def test_frozen(self) -> None:
        spec = AlarmSpec(metric="Count", resource="dummy")
        with pytest.raises(ValidationError):
            spec.resource = "other"  # type: ignore[misc]


class TestEmptyMethods:
    def test_defaults_reject_empty_list(self) -> None:
        with pytest.raises(ValidationError):
            AlarmDefaults(methods=[])

    def test_missing_data_spec_rejects_empty_list(self) -> None:
        with pytest.raises(ValidationError):
            MissingDataAlarmSpec(resource="dummy", methods=[])


class TestAlarmEvaluation:
    def test_datapoints_may_exceed_periods(self) -> None:
        evaluation = AlarmEvaluation(evaluation_periods=2, datapoints_to_alarm=3)
        assert evaluation.datapoints_to_alarm == 3

    def test_zero_periods_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AlarmEvaluation(evaluation_periods=0, datapoints_to_alarm=1)


class TestMonitoringProps:
    def test_defaults(self) -> None:
        props = MonitoringProps(api_gateway=ApiGateway(api_name="api", stage="prod"))
        assert props.alarms == []
        assert props.missing_data_alarms == []
        assert props.alarm_defaults is None
        assert props.sns_email_address is None

    def test_from_camel_case_document(self) -> None:
        props = MonitoringProps.model_validate(
            {
                "apiGateway": {"apiName": "api", "stage": "prod"},
                "alarms": [{"metric": "4XXError", "resource": "dummy"}],
                "alarmDefaults": {"methods": ["GET", "POST"], "period": 60},
                "missingDataAlarms": [{"resource": "dummy"}],
                "snsEmailAddress": "ops@example.com",
            }
        )
        assert props.api_gateway.api_name == "api"
        assert isinstance(props.alarms[0], AlarmSpec)
        assert isinstance(props.alarm_defaults, AlarmDefaults)
        assert props.alarm_defaults.methods == [HttpMethod.GET, HttpMethod.POST]
        assert isinstance(props.missing_data_alarms[0], MissingDataAlarmSpec)
        assert props.sns_email_address == "ops@example.com"

    def test_api_gateway_requires_stage(self) -> None:
        with pytest.raises(ValidationError):
            ApiGateway(api_name="api", stage="")
