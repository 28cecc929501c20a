"""
Data-access error taxonomy and the FastAPI handlers that render it.

Database failures are translated once, in the data-access layer, into one of
these types so routers never inspect driver exceptions:

- QueryPreconditionError: the schema the query depends on is missing
  (table, column or index). Carries a prescriptive message.
- PermissionDeniedError: the database rejected the statement for the
  connected role.
- DataAccessError: anything else; the original message is passed through.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from app.core.logging import capture_error, get_logger

logger = get_logger(__name__)

PRECONDITION_MARKERS = ("no such table", "no such column", "no such index", "does not exist", "undefinedtable", "undefinedcolumn", "undefinedobject")
PERMISSION_MARKERS = ("permission denied", "insufficient privilege", "readonly database")


class DataAccessError(Exception):
    """Base class for failures talking to the database."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, collection: str = None):
        super().__init__(message)
        self.message = message
        self.collection = collection


class QueryPreconditionError(DataAccessError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class PermissionDeniedError(DataAccessError):
    status_code = status.HTTP_403_FORBIDDEN


class RequestCancelled(Exception):
    """The client went away before all collections were loaded."""


def translate_db_error(error: SQLAlchemyError, collection: str) -> DataAccessError:
    """Map a SQLAlchemy exception raised while querying `collection`."""
    raw = str(getattr(error, "orig", None) or error)
    lowered = raw.lower()

    if isinstance(error, DBAPIError) and any(marker in lowered for marker in PERMISSION_MARKERS):
        return PermissionDeniedError(
            f"Permission denied while accessing {collection}. Check the database role grants.",
            collection,
        )
    if any(marker in lowered for marker in PRECONDITION_MARKERS):
        return QueryPreconditionError(
            f"Database schema required for {collection} collection is missing. "
            f"Run the migrations or create the tables/indexes. ({raw})",
            collection,
        )
    return DataAccessError(raw, collection)


async def data_access_error_handler(request: Request, exc: DataAccessError) -> JSONResponse:
    capture_error(
        exc,
        context={"request": {"path": request.url.path, "method": request.method}},
        tags={"collection": exc.collection or "unknown"},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "collection": exc.collection},
    )


async def request_cancelled_handler(request: Request, exc: RequestCancelled) -> JSONResponse:
    logger.info(f"Client disconnected before {request.url.path} finished loading")
    # 499 is the conventional "client closed request" code; nobody reads it
    return JSONResponse(status_code=499, content={"detail": "Request cancelled"})
