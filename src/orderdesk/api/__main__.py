"""
orderdesk.api.__main__

Entrypoint for running the service via `python -m orderdesk.api`.
"""

from __future__ import annotations

import uvicorn

from orderdesk.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "orderdesk.api.app:app_from_env",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.env == "dev",
        log_config=None,  # structlog owns logging setup
    )


if __name__ == "__main__":
    main()
