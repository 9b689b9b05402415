"""
Errors shared by the core services.

Connectivity failures of the store surface as STORE_UNAVAILABLE so callers
can retry; every other database error propagates unchanged.
"""

from sqlalchemy import exc as sa_exc

from libs.result import Error

TRANSIENT_STORE_ERRORS = (sa_exc.OperationalError, sa_exc.TimeoutError)


def store_unavailable(message: str = "Identity store is temporarily unavailable") -> Error:
    return Error("STORE_UNAVAILABLE", message)
