from __future__ import annotations

from enum import Enum

from .errors import TransportError

# Jira Cloud answers removed search endpoints with this changelog reference,
# sometimes without a distinguishing status code.
MIGRATION_NOTICE_MARKER = "CHANGE-2046"


class ErrorClass(str, Enum):
    MIGRATION_REQUIRED = "migration_required"
    GONE = "gone"
    NOT_FOUND = "not_found"
    OTHER = "other"


FALLBACK_ELIGIBLE = frozenset(
    {ErrorClass.MIGRATION_REQUIRED, ErrorClass.GONE, ErrorClass.NOT_FOUND}
)


def classify_error(err: BaseException) -> ErrorClass:
    """
    Tag an error raised by the enhanced search endpoint.
    Errors that did not come from the REST transport are always OTHER.
    """
    if not isinstance(err, TransportError):
        return ErrorClass.OTHER
    if MIGRATION_NOTICE_MARKER in err.message:
        return ErrorClass.MIGRATION_REQUIRED
    if err.code == 410:
        return ErrorClass.GONE
    if err.code == 404:
        return ErrorClass.NOT_FOUND
    return ErrorClass.OTHER


def is_fallback_eligible(err: BaseException) -> bool:
    return classify_error(err) in FALLBACK_ELIGIBLE
