"""Logging setup and structured logging for gateway calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process.

    Args:
        level: Log level name (e.g. "INFO", "DEBUG")
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class StructuredGatewayLogger:
    """Structured logger for persistence gateway calls."""

    def log_call(
        self,
        operation: str,
        backend: str,
        outcome: str,
        latency_ms: float,
        trip_id: str | None = None,
        item_id: str | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log one gateway call with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "backend": backend,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }
        if trip_id:
            log_data["trip_id"] = trip_id
        if item_id:
            log_data["item_id"] = item_id
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Gateway call: {operation} ({backend}) - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
