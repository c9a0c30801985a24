import logging
from functools import wraps
from http import HTTPStatus

from fastapi import HTTPException

logger = logging.getLogger(__name__)

ERRMAP: dict[str, HTTPStatus] = {
    "invalid_score": HTTPStatus.UNPROCESSABLE_ENTITY,
    "content_not_found": HTTPStatus.NOT_FOUND,
    "review_not_found": HTTPStatus.NOT_FOUND,
    "list_not_found": HTTPStatus.NOT_FOUND,
    "forbidden": HTTPStatus.FORBIDDEN,
    "self_vote_forbidden": HTTPStatus.BAD_REQUEST,
    "conflict_duplicate": HTTPStatus.CONFLICT,
}


def error_code(error: RuntimeError) -> str:
    """Leading code of a coded RuntimeError ("review_not_found: 42")."""
    return str(error).split(":", 1)[0].strip()


def handle_runtime_errors(mapping: dict[str, HTTPStatus] = ERRMAP):
    """
    Translate coded RuntimeErrors raised by services into HTTPException.
    Unknown codes (storage_error included) become a bare 500 whose
    detail never leaks the underlying message.
    """
    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except RuntimeError as e:
                code = error_code(e)
                status = mapping.get(code)
                if status is not None:
                    raise HTTPException(status_code=status, detail=code)
                logger.error("unhandled_service_error",
                             extra={"code": code, "err": str(e)})
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail="internal_error")
        return wrapper
    return decorator
