"""
Main entrypoint: FastAPI donate action server.

Env: SOLANA_RPC_URL / SOLANA_NETWORK, DONATE_DESTINATION_WALLET, DONATE_MOUNT_PATH,
API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT, etc. (see solana_donate.config.settings).

Equivalent: uvicorn solana_donate.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from solana_donate.donate_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Load settings, build the app and serve it with uvicorn."""
    api_host = os.getenv("API_HOST", "0.0.0.0").strip()
    api_port = int(os.getenv("API_PORT", "8000").strip() or "8000")

    from solana_donate.api_server.server import create_app
    from solana_donate.config import get_settings
    import uvicorn

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("main_config_error", error=str(e))
        raise SystemExit(1) from e

    app = create_app(settings)
    logger.info("main_server_starting", host=api_host, port=api_port)
    uvicorn.run(app, host=api_host, port=api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
