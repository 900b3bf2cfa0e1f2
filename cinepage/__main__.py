"""Module executed when running ``python -m cinepage``."""

from __future__ import annotations

import uvicorn

from app.config import settings


def main() -> None:
    """Serve the catalog site with uvicorn using the configured settings."""

    development = settings.environment == "development"
    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=development,
        # Production deployments sit behind a TLS-terminating proxy.
        proxy_headers=not development,
    )


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
