"""
Application-level exceptions.

Each carries an HTTP status code and a stable error_code so the API layer
renders them as a consistent JSON body: {"message": ..., "error_code": ...}.
"""

from __future__ import annotations


class DonateError(Exception):
    """Base for request-scoped errors surfaced to the caller."""

    status_code: int = 400
    error_code: str = "donate_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "error_code": self.error_code}


class InvalidAmount(DonateError):
    """Amount missing, non-numeric, negative or out of range."""

    error_code = "invalid_amount"


class InvalidAccount(DonateError):
    """Account string does not decode to a 32-byte public key."""

    error_code = "invalid_account"


class AssemblyFailed(DonateError):
    """Ledger collaborator could not produce a compiled transaction (RPC down, timeout)."""

    status_code = 503
    error_code = "assembly_failed"
