"""
FastAPI/ASGI application entrypoint.

Build the ASGI app from env settings.
Run with: uvicorn solana_donate.api_server.app:app --host 0.0.0.0 --port 8000
"""

from solana_donate.api_server.server import create_app

app = create_app()

__all__ = ["app"]
