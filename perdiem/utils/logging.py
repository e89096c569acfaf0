"""Structured logging for timeline normalization."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Install a basic handler for the perdiem logger tree."""
    root = logging.getLogger("perdiem")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(level.upper())


class StructuredTimelineLogger:
    """Structured logger for projection passes."""

    def log_skip(self, kind: str, source_id: str, reason: str, **fields: Any) -> None:
        """Log an event omitted from the current render pass."""
        log_data: dict[str, Any] = {
            "kind": kind,
            "source_id": source_id,
            "reason": reason,
        }
        log_data.update(fields)

        logger.warning(f"Timeline skip: {kind} {source_id} - {reason}", extra={"structured": log_data})

    def log_projection(
        self,
        total_days: int,
        events: int,
        midnights: int,
        skipped: int,
        latency_ms: float,
    ) -> None:
        """Log projection summary."""
        log_data: dict[str, Any] = {
            "total_days": total_days,
            "events": events,
            "midnights": midnights,
            "skipped": skipped,
            "latency_ms": round(latency_ms, 2),
        }

        logger.debug(
            f"Projection: {events} events, {skipped} skipped", extra={"structured": log_data}
        )
