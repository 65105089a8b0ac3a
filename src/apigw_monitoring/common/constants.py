"""Constants and enums for API Gateway monitoring."""

from enum import StrEnum
from typing import Final


class Metric(StrEnum):
    """API Gateway metrics an alarm can watch."""

    ERROR_5XX = "5XXError"
    ERROR_4XX = "4XXError"
    COUNT = "Count"
    LATENCY = "Latency"


class HttpMethod(StrEnum):
    """HTTP methods exposed as the API Gateway ``Method`` dimension."""

    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"


class Statistic(StrEnum):
    """Statistics used when combining per-method metrics."""

    SUM = "Sum"
    AVERAGE = "Average"
    SAMPLE_COUNT = "SampleCount"


class LatencyStatistic(StrEnum):
    """Statistics a single-method latency alarm may be evaluated on."""

    AVERAGE = "Average"
    MAXIMUM = "Maximum"
    P99 = "p99"
    P95 = "p95"
    P90 = "p90"
    P85 = "p85"
    P80 = "p80"
    P75 = "p75"
    P70 = "p70"
    P65 = "p65"
    P60 = "p60"
    P55 = "p55"
    P50 = "p50"


class TreatMissingData(StrEnum):
    """How an alarm evaluates periods without datapoints."""

    BREACHING = "breaching"
    NOT_BREACHING = "notBreaching"
    IGNORE = "ignore"
    MISSING = "missing"


class ComparisonOperator(StrEnum):
    """CloudWatch comparison operators used by generated alarms."""

    LESS_THAN_LOWER_OR_GREATER_THAN_UPPER_THRESHOLD = "LessThanLowerOrGreaterThanUpperThreshold"
    GREATER_THAN_UPPER_THRESHOLD = "GreaterThanUpperThreshold"
    LESS_THAN_THRESHOLD = "LessThanThreshold"


API_GATEWAY_NAMESPACE: Final[str] = "AWS/ApiGateway"

DEFAULT_METHODS: Final[tuple[HttpMethod, ...]] = (
    HttpMethod.DELETE,
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.OPTIONS,
)
DEFAULT_N_STDS: Final[float] = 3
DEFAULT_ALARM_PERIOD: Final[int] = 60 * 5
DEFAULT_EVALUATION_PERIODS: Final[int] = 1
DEFAULT_DATAPOINTS_TO_ALARM: Final[int] = 1
DEFAULT_ALARM_ACTIONS_ENABLED: Final[bool] = False
DEFAULT_TREAT_MISSING_DATA: Final[TreatMissingData] = TreatMissingData.NOT_BREACHING

# Weighted latency expressions query two series per method
MAX_LATENCY_METHODS: Final[int] = 5

__all__ = [
    "Metric",
    "HttpMethod",
    "Statistic",
    "LatencyStatistic",
    "TreatMissingData",
    "ComparisonOperator",
    "API_GATEWAY_NAMESPACE",
    "DEFAULT_METHODS",
    "DEFAULT_N_STDS",
    "DEFAULT_ALARM_PERIOD",
    "DEFAULT_EVALUATION_PERIODS",
    "DEFAULT_DATAPOINTS_TO_ALARM",
    "DEFAULT_ALARM_ACTIONS_ENABLED",
    "DEFAULT_TREAT_MISSING_DATA",
    "MAX_LATENCY_METHODS",
]
