"""Observability API endpoints.

Provides metrics, health checks, and readiness probes for monitoring.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ..dependencies import get_upload_manager
from ..domain.uploads import UploadManager, UploadRootKind
from .health import HealthStatus, check_directory_health, get_overall_health
from .logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    description="Exposes Prometheus metrics for monitoring and alerting",
    include_in_schema=False,
)
def metrics():
    """Expose Prometheus metrics in the text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns health status of the upload directories",
    status_code=200,
)
def health_check(manager: UploadManager = Depends(get_upload_manager)):
    """Check that both upload roots exist and are writable.

    Returns 200 OK unless a root is unhealthy, then 503.

    Args:
        manager: Upload manager owning the roots

    Returns:
        JSONResponse: Health status of each root and overall status
    """
    components = {
        f"{kind.value}_root": check_directory_health(manager.get_root(kind))
        for kind in UploadRootKind
    }

    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        }
    }

    status_code = 200 if overall_status != HealthStatus.UNHEALTHY else 503

    return JSONResponse(
        content=response_data,
        status_code=status_code
    )
