"""Observability module: structured logging, metrics, request IDs and health checks."""

from .logging_config import configure_logging, get_logger
from .metrics import (
    feed_items_posted_total,
    group_sync_duration_seconds,
    group_sync_skipped_total,
    inbound_emails_total,
    mirror_records_written_total,
)
from .request_id import (
    generate_request_id,
    get_request_id,
    request_id_scope,
    request_id_var,
    set_request_id,
)
from .health import ComponentHealth, HealthStatus
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "feed_items_posted_total",
    "group_sync_duration_seconds",
    "group_sync_skipped_total",
    "inbound_emails_total",
    "mirror_records_written_total",
    # Request ID
    "generate_request_id",
    "get_request_id",
    "request_id_scope",
    "request_id_var",
    "set_request_id",
    # Health
    "ComponentHealth",
    "HealthStatus",
    # Middleware
    "RequestIDMiddleware",
]
