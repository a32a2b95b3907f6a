"""
Main module entry point.

Runs the sidecar HTTP server: ``python -m predict_sidecar.main``.
"""

import uvicorn

from predict_sidecar.main.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "predict_sidecar.main.app:app",
        host=settings.sidecar.host,
        port=settings.sidecar.port,
        reload=settings.sidecar.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
