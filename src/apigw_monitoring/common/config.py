"""Library configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings

from apigw_monitoring.common.constants import API_GATEWAY_NAMESPACE


class MonitoringConfig(BaseSettings):
    """Naming of generated resources, loaded from environment variables."""

    namespace: str = API_GATEWAY_NAMESPACE
    topic_display_name: str = "API Gateway monitoring alarm"
    dashboard_name: str = "monitoring-dashboard"

    model_config = {"env_prefix": "APIGW_MONITORING_", "case_sensitive": False}


__all__ = ["MonitoringConfig"]
