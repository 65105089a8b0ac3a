"""In-memory provisioning port rendering a CloudFormation template.

Resources are keyed by logical ids derived from their construct names. Two
alarms with the same resource, metric and statistic share a name and collide.
"""

from __future__ import annotations

import hashlib
import json
import logging
import re
from typing import Any

from apigw_monitoring.alarms.factory import AlarmDefinition, ResourceRef
from apigw_monitoring.monitoring.ports import AlarmWidget

logger = logging.getLogger(__name__)

TOPIC_TYPE = "AWS::SNS::Topic"
SUBSCRIPTION_TYPE = "AWS::SNS::Subscription"
ALARM_TYPE = "AWS::CloudWatch::Alarm"
DASHBOARD_TYPE = "AWS::CloudWatch::Dashboard"

ALARM_ARN_TEMPLATE = "arn:${AWS::Partition}:cloudwatch:${AWS::Region}:${AWS::AccountId}:alarm:"

WIDGET_WIDTH = 6
WIDGET_HEIGHT = 6
GRID_WIDTH = 24


def to_logical_id(name: str) -> str:
    """Alphanumeric logical id with a digest of the raw name appended.

    Names differing only in punctuation get distinct ids.
    """
    stripped = re.sub(r"[^A-Za-z0-9]", "", name)
    if not stripped:
        raise ValueError(f"cannot derive a logical id from {name!r}")
    digest = hashlib.sha256(name.encode("utf-8")).hexdigest()[:8].upper()
    return f"{stripped}{digest}"


def _arn_string(ref: ResourceRef) -> str:
    if isinstance(ref, str):
        return ref
    return ref["Fn::Sub"]


class TemplateRecorder:
    """Collects provisioned resources into a template document."""

    def __init__(self) -> None:
        self._resources: dict[str, dict[str, Any]] = {}
        self._names: set[str] = set()
        self._dashboard_id: str | None = None
        self._dashboard_name: str | None = None
        self._widgets: list[AlarmWidget] = []

    def _add_resource(self, name: str, resource_type: str, properties: dict[str, Any]) -> str:
        if name in self._names:
            raise ValueError(f"duplicate resource {name!r}")
        logical_id = to_logical_id(name)
        self._names.add(name)
        self._resources[logical_id] = {"Type": resource_type, "Properties": properties}
        logger.debug("Recorded %s %s", resource_type, logical_id)
        return logical_id

    # --- MonitoringPort ---

    def create_topic(self, display_name: str) -> ResourceRef:
        logical_id = self._add_resource(display_name, TOPIC_TYPE, {"DisplayName": display_name})
        return {"Ref": logical_id}

    def add_email_subscription(self, topic: ResourceRef, address: str) -> None:
        topic_id = topic["Ref"] if isinstance(topic, dict) else topic
        self._add_resource(
            f"{topic_id} {address}",
            SUBSCRIPTION_TYPE,
            {"Protocol": "email", "TopicArn": topic, "Endpoint": address},
        )

    def create_dashboard(self, name: str) -> None:
        if self._dashboard_id is not None:
            raise ValueError(f"dashboard already created: {self._dashboard_name}")
        self._dashboard_id = self._add_resource(f"{name} dashboard", DASHBOARD_TYPE, {"DashboardName": name})
        self._dashboard_name = name

    def record_alarm_definition(self, definition: AlarmDefinition) -> ResourceRef:
        self._add_resource(definition.logical_name, ALARM_TYPE, definition.to_properties())
        return {"Fn::Sub": ALARM_ARN_TEMPLATE + definition.alarm_name}

    def add_alarm_widget(self, widget: AlarmWidget) -> None:
        if self._dashboard_id is None:
            raise ValueError("create_dashboard must be called before adding widgets")
        self._widgets.append(widget)

    # --- Template access ---

    def dashboard_body(self) -> dict[str, Any]:
        per_row = GRID_WIDTH // WIDGET_WIDTH
        widgets = []
        for index, widget in enumerate(self._widgets):
            widgets.append(
                {
                    "type": "alarm",
                    "width": WIDGET_WIDTH,
                    "height": WIDGET_HEIGHT,
                    "x": (index % per_row) * WIDGET_WIDTH,
                    "y": (index // per_row) * WIDGET_HEIGHT,
                    "properties": {
                        "title": widget.title,
                        "alarms": [_arn_string(widget.alarm)],
                    },
                }
            )
        return {"widgets": widgets}

    def resources_of_type(self, resource_type: str) -> dict[str, dict[str, Any]]:
        return {k: v for k, v in self._resources.items() if v["Type"] == resource_type}

    def to_dict(self) -> dict[str, Any]:
        resources = {k: dict(v) for k, v in self._resources.items()}
        if self._dashboard_id is not None:
            dashboard = resources[self._dashboard_id]
            dashboard["Properties"] = {
                **dashboard["Properties"],
                "DashboardBody": {"Fn::Sub": json.dumps(self.dashboard_body())},
            }
        return {"Resources": resources}

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


__all__ = [
    "TOPIC_TYPE",
    "SUBSCRIPTION_TYPE",
    "ALARM_TYPE",
    "DASHBOARD_TYPE",
    "TemplateRecorder",
    "to_logical_id",
]
