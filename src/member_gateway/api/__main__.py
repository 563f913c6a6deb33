"""
member_gateway.api.__main__

Entrypoint for running the gateway via `python -m member_gateway.api` (or `member-gateway`).
"""

from __future__ import annotations

import uvicorn

from member_gateway.api.app import create_app
from member_gateway.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        # Logging is structlog's; requests are logged by RequestContextMiddleware.
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
