from .app import create_app, make_services_from_settings
from .observability import RequestContextMiddleware, RequestIdFilter, configure_logging, current_request_id
from .settings import GatewaySettings

__all__ = [
    "create_app",
    "make_services_from_settings",
    "RequestContextMiddleware",
    "RequestIdFilter",
    "configure_logging",
    "current_request_id",
    "GatewaySettings",
]
