"""Health check utilities for FileDrop.

Reports whether the upload directories are usable.
"""

import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from .logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_directory_health(directory: Path) -> ComponentHealth:
    """Check that a directory exists and is writable.

    Args:
        directory: Directory to check

    Returns:
        ComponentHealth: Directory health status
    """
    start = time.time()
    if not directory.is_dir():
        logger.error(f"Health check failed: {directory} is not a directory")
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message=f"{directory} is missing or not a directory",
        )

    if not os.access(directory, os.W_OK | os.X_OK):
        logger.warning(f"Health check degraded: {directory} is not writable")
        return ComponentHealth(
            status=HealthStatus.DEGRADED,
            message=f"{directory} is not writable",
        )

    latency_ms = (time.time() - start) * 1000
    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message="Directory OK",
        latency_ms=round(latency_ms, 2),
    )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Determine overall system health from component health.

    Args:
        components: Dictionary of component name to health status

    Returns:
        HealthStatus: UNHEALTHY if any component is unhealthy, DEGRADED if
        any is degraded, HEALTHY otherwise
    """
    statuses = [comp.status for comp in components.values()]

    if HealthStatus.UNHEALTHY in statuses:
        return HealthStatus.UNHEALTHY
    if HealthStatus.DEGRADED in statuses:
        return HealthStatus.DEGRADED

    return HealthStatus.HEALTHY
