"""
Structured logging for Solana Donate.

JSON logs with timestamp, event_type and request-scoped context (request_id).
Use get_logger() in all modules.
"""

from solana_donate.donate_logging.logger import bind_request, get_logger

__all__ = ["bind_request", "get_logger"]
