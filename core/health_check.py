"""
Health Check Service

Provides health checks for the running service:
- Storage backend reachability (memory or MongoDB)
- System metrics (CPU, memory, disk)
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import psutil

from database.repository import StorageRepository

logger = logging.getLogger(__name__)


class HealthCheckService:
    """Service health check"""

    def check_storage(self, storage: StorageRepository) -> Dict[str, Any]:
        """
        Ping the storage backend

        Returns:
            Dict with status, backend name and latency
        """
        start_time = time.time()

        try:
            reachable = storage.ping()
        except Exception as e:
            logger.error(f"❌ Storage health check error: {str(e)}")
            return {
                "status": "unhealthy",
                "backend": storage.backend_name,
                "error": type(e).__name__,
                "message": str(e)[:100],
                "latency_ms": 0
            }

        latency_ms = round((time.time() - start_time) * 1000, 2)

        if not reachable:
            logger.error(f"❌ Storage health check failed ({storage.backend_name})")

        return {
            "status": "healthy" if reachable else "unhealthy",
            "backend": storage.backend_name,
            "latency_ms": latency_ms
        }

    def get_system_metrics(self) -> Dict[str, Any]:
        """
        Get system resource usage metrics

        Returns:
            Dict with CPU, memory, and disk usage
        """
        try:
            cpu_percent = psutil.cpu_percent(interval=0.1)
            memory = psutil.virtual_memory()

            try:
                disk = psutil.disk_usage('/')
                disk_info = {
                    "total_gb": round(disk.total / (1024 ** 3), 2),
                    "free_gb": round(disk.free / (1024 ** 3), 2),
                    "percent": disk.percent
                }
            except OSError as e:
                logger.warning(f"⚠️ Disk usage unavailable: {str(e)}")
                disk_info = {"status": "unavailable", "reason": str(e)}

            return {
                "cpu": {
                    "percent": cpu_percent,
                    "count": psutil.cpu_count()
                },
                "memory": {
                    "total_mb": round(memory.total / (1024 ** 2), 2),
                    "available_mb": round(memory.available / (1024 ** 2), 2),
                    "percent": memory.percent
                },
                "disk": disk_info
            }

        except Exception as e:
            logger.error(f"❌ System metrics error: {str(e)}")
            return {
                "error": str(e),
                "status": "unavailable"
            }

    def run(self, storage: StorageRepository, include_system: bool = False) -> Dict[str, Any]:
        """
        Run the health checks

        Args:
            storage: Repository to ping
            include_system: If True, also collects system metrics (?deep=true)

        Returns:
            Dict with overall status ("healthy" or "degraded") and each check
        """
        start_time = time.time()

        result = {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {}
        }

        storage_result = self.check_storage(storage)
        result["checks"]["storage"] = storage_result
        if storage_result["status"] == "unhealthy":
            result["status"] = "degraded"

        if include_system:
            result["checks"]["system"] = self.get_system_metrics()
        else:
            result["checks"]["system"] = {
                "status": "skipped",
                "message": "Use ?deep=true for system metrics"
            }

        result["check_duration_ms"] = round((time.time() - start_time) * 1000, 2)
        return result


# Singleton instance
_health_check_service: Optional[HealthCheckService] = None


def get_health_check_service() -> HealthCheckService:
    """Get singleton health check service instance"""
    global _health_check_service

    if _health_check_service is None:
        _health_check_service = HealthCheckService()

    return _health_check_service
