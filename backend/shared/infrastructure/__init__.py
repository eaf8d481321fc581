"""
Infrastructure module: database engines/sessions and request correlation.
"""

from shared.infrastructure.db import (
    create_db_engine,
    create_session_factory,
    session_scope,
    safe_commit,
)
from shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    CorrelationIdFilter,
    get_request_id,
)

__all__ = [
    # db
    "create_db_engine",
    "create_session_factory",
    "session_scope",
    "safe_commit",
    # correlation
    "CorrelationIdMiddleware",
    "CorrelationIdFilter",
    "get_request_id",
]
