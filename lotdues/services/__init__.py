"""Services: database sessions, ledger access and the reconciliation engine."""

from lotdues.services.db import (
    AsyncSessionLocal,
    get_async_session,
    init_db,
    init_engines,
)

__all__ = [
    "AsyncSessionLocal",
    "get_async_session",
    "init_db",
    "init_engines",
]
