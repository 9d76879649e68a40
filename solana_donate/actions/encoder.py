"""Base64 transport encoding for serialized transactions."""

from __future__ import annotations

import base64
import binascii

from solders.transaction import VersionedTransaction


def encode_transaction(tx: VersionedTransaction) -> str:
    """Serialize to wire bytes, then standard base64 text."""
    return base64.b64encode(bytes(tx)).decode("ascii")


def decode_transaction(encoded: str) -> VersionedTransaction:
    """
    Inverse of encode_transaction.

    Raises:
        ValueError: not valid base64 or not a serialized versioned transaction.
    """
    try:
        raw = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise ValueError("transaction is not valid base64") from e
    return VersionedTransaction.from_bytes(raw)
