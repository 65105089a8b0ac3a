"""Method selection of an alarm: a single method or a list of methods.

A list holding one method is still a ``ManyMethods`` selection. Latency
statistic overrides accept only ``SingleMethod``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from apigw_monitoring.common.constants import HttpMethod


@dataclass(frozen=True)
class SingleMethod:
    """One method given as a scalar."""

    method: HttpMethod


@dataclass(frozen=True)
class ManyMethods:
    """Methods given as a list, in declaration order."""

    methods: tuple[HttpMethod, ...]

    def __len__(self) -> int:
        return len(self.methods)


MethodSelection = SingleMethod | ManyMethods


def to_method_selection(value: HttpMethod | str | Sequence[HttpMethod | str]) -> MethodSelection:
    """Tag a configured ``methods`` value by its shape."""
    if isinstance(value, str):
        return SingleMethod(HttpMethod(value))
    if not value:
        raise ValueError("methods list must not be empty")
    return ManyMethods(tuple(HttpMethod(m) for m in value))


__all__ = ["SingleMethod", "ManyMethods", "MethodSelection", "to_method_selection"]
