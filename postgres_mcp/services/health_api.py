"""Health monitoring API service."""

from datetime import datetime
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException

from postgres_mcp import __version__
from postgres_mcp.lib.logging_config import get_logger

logger = get_logger(__name__)


class HealthAPI:
    """Health monitoring API service running independently from MCP."""

    def __init__(self, db_service=None, host: str = "0.0.0.0", port: int = 8080,
                 allow_write_ops: Optional[bool] = None):
        """Initialize health API service.

        Args:
            db_service: Database service instance for health checks
            host: Host to bind the health API to
            port: Port to bind the health API to
            allow_write_ops: Write policy reported by /health, if known
        """
        self.db_service = db_service
        self.host = host
        self.port = port
        self.allow_write_ops = allow_write_ops
        self.app = FastAPI(title="MCP Health API", version=__version__)
        self.start_time = datetime.now()

        self._setup_routes()

    def _setup_routes(self):
        """Set up FastAPI routes for health monitoring."""

        @self.app.get("/health")
        async def health_check() -> Dict[str, Any]:
            """Overall system health status."""
            try:
                uptime = (datetime.now() - self.start_time).total_seconds()
                db_healthy = self._check_database_health()

                return {
                    "status": "healthy" if db_healthy else "degraded",
                    "timestamp": datetime.now().isoformat(),
                    "uptime_seconds": uptime,
                    "version": __version__,
                    "write_operations_enabled": self.allow_write_ops
                }
            except Exception as e:
                logger.error(f"Health check error: {e}")
                raise HTTPException(status_code=503, detail=str(e))

        @self.app.get("/health/database")
        async def database_health() -> Dict[str, Any]:
            """Database connection pool status."""
            if not self.db_service:
                return {
                    "status": "unavailable",
                    "message": "Database service not configured"
                }

            try:
                self.db_service.test_connection()
                return {
                    "status": "healthy",
                    "connection_pool": self.db_service.get_status(),
                    "timestamp": datetime.now().isoformat()
                }
            except Exception as e:
                logger.error(f"Database health check error: {e}")
                return {
                    "status": "unhealthy",
                    "error": str(e),
                    "connection_pool": self.db_service.get_status(),
                    "timestamp": datetime.now().isoformat()
                }

    def _check_database_health(self) -> bool:
        if not self.db_service:
            return False
        try:
            self.db_service.test_connection()
            return True
        except Exception as e:
            logger.warning(f"Database health probe failed: {e}")
            return False

    def run(self):
        """Serve the health API until the process exits."""
        logger.info(f"Health API listening on http://{self.host}:{self.port}/health")
        uvicorn.run(self.app, host=self.host, port=self.port, log_level="warning")
