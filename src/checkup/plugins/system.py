"""Host and process health checker."""

import platform
import sys
import time
from typing import Any

import psutil

from ..domain.models import CheckOutcome, HealthStatus
from .base import Plugin, define_plugin


def collect_system_info() -> dict[str, int | float | str]:
    """Basic information about the host and the current process."""
    memory = psutil.virtual_memory()
    cpu_times = psutil.Process().cpu_times()
    load_1m, load_5m, load_15m = psutil.getloadavg()
    now = time.time()

    return {
        "ts": int(now * 1000),
        "uptime": round(now - psutil.boot_time(), 3),
        "platform": sys.platform,
        "arch": platform.machine(),
        "cpus": psutil.cpu_count() or 0,
        "cpu_usage_system": cpu_times.system,
        "cpu_usage_user": cpu_times.user,
        "memory_total": memory.total,
        "memory_free": memory.available,
        "load_average_1m": load_1m,
        "load_average_5m": load_5m,
        "load_average_15m": load_15m,
    }


@define_plugin
def system_plugin(checker_name: str = "system", debug: bool = True) -> Plugin:
    """Add a checker reporting the process as healthy.

    With ``debug`` enabled the outcome carries host and process details.
    """

    def check_system(_context: Any) -> CheckOutcome:
        if not debug:
            return CheckOutcome(status=HealthStatus.HEALTHY)
        return CheckOutcome(status=HealthStatus.HEALTHY, debug=collect_system_info())

    return Plugin(checkers={checker_name: check_system})
