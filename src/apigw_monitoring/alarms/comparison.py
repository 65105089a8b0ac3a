"""Comparison operator and threshold selection for generated alarms."""

from __future__ import annotations

from typing import Final

from apigw_monitoring.common.constants import ComparisonOperator, Metric, TreatMissingData

# Missing data alarms fire when fewer than one request sample is seen
MISSING_DATA_THRESHOLD: Final[float] = 1
MISSING_DATA_COMPARISON: Final[ComparisonOperator] = ComparisonOperator.LESS_THAN_THRESHOLD
MISSING_DATA_TREATMENT: Final[TreatMissingData] = TreatMissingData.BREACHING


def select_comparison_operator(metric: Metric) -> ComparisonOperator:
    """Pick how an anomaly detection alarm compares against its band.

    Request counts alarm on both sides of the band; errors and latency only
    above it.
    """
    if metric == Metric.COUNT:
        return ComparisonOperator.LESS_THAN_LOWER_OR_GREATER_THAN_UPPER_THRESHOLD
    return ComparisonOperator.GREATER_THAN_UPPER_THRESHOLD


__all__ = [
    "MISSING_DATA_THRESHOLD",
    "MISSING_DATA_COMPARISON",
    "MISSING_DATA_TREATMENT",
    "select_comparison_operator",
]
