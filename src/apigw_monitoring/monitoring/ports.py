"""Provisioning port used to wire alarms, dashboard and notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from apigw_monitoring.alarms.factory import AlarmDefinition, ResourceRef


@dataclass(frozen=True)
class AlarmWidget:
    """A dashboard widget showing the state of one alarm."""

    title: str
    alarm: ResourceRef


@runtime_checkable
class MonitoringPort(Protocol):
    """Infrastructure layer that provisions what the library generates."""

    def create_topic(self, display_name: str) -> ResourceRef:
        """Create the notification topic and return a reference to it."""
        ...

    def add_email_subscription(self, topic: ResourceRef, address: str) -> None:
        ...

    def create_dashboard(self, name: str) -> None:
        ...

    def record_alarm_definition(self, definition: AlarmDefinition) -> ResourceRef:
        """Provision an alarm and return a reference to its ARN."""
        ...

    def add_alarm_widget(self, widget: AlarmWidget) -> None:
        ...


__all__ = ["AlarmWidget", "MonitoringPort"]
