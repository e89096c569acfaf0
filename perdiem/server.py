"""Uvicorn runner for the Per Diem Timeline API."""

import uvicorn

from perdiem.config import get_settings


def main() -> None:
    """Serve ``perdiem.main:app`` on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "perdiem.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
