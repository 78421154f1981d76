# flakeproof/core/idempotency/__init__.py
"""
Idempotency support for side-effecting tools.

No side effects on import.
"""

from .store import IdempotencyRecord, IdempotencyStore, fingerprint

__all__ = [
    "IdempotencyRecord",
    "IdempotencyStore",
    "fingerprint",
]
