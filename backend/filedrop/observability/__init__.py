"""Observability module for FileDrop.

Provides structured logging, metrics and health checks.
"""

from .health import ComponentHealth, HealthStatus
from .logging_config import configure_logging, get_logger
from .metrics import (
    promotions_total,
    transfer_errors_total,
    upload_size_bytes,
    uploads_total,
)
from .middleware import RequestIDMiddleware
from .request_id import generate_request_id, get_request_id, request_id_var, set_request_id

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "uploads_total",
    "upload_size_bytes",
    "transfer_errors_total",
    "promotions_total",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    # Health
    "HealthStatus",
    "ComponentHealth",
    # Middleware
    "RequestIDMiddleware",
]
