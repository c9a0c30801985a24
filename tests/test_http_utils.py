from http import HTTPStatus
import pytest
from cinelog_api.api.http_utils import (
    ERRMAP,
    error_code,
    handle_runtime_errors,
)
from cinelog_api.core.errors import (
    ContentNotFound,
    Forbidden,
    InvalidScore,
    SelfVoteForbidden,
    StorageError,
)
from fastapi import HTTPException


def test_error_code_reads_leading_code():
    assert error_code(ContentNotFound("42")) == "content_not_found"
    assert error_code(RuntimeError("boom")) == "boom"


async def test_handle_runtime_errors_maps_known_code():
    @handle_runtime_errors({"boom": HTTPStatus.BAD_REQUEST})
    async def fn():
        raise RuntimeError("boom: with details")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == HTTPStatus.BAD_REQUEST
    assert e.value.detail == "boom"


@pytest.mark.parametrize("error, status", [
    (InvalidScore("0"), HTTPStatus.UNPROCESSABLE_ENTITY),
    (ContentNotFound("1"), HTTPStatus.NOT_FOUND),
    (Forbidden(), HTTPStatus.FORBIDDEN),
    (SelfVoteForbidden("r"), HTTPStatus.BAD_REQUEST),
])
async def test_domain_errors_map_to_distinct_statuses(error, status):
    @handle_runtime_errors(ERRMAP)
    async def fn():
        raise error
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == status
    assert e.value.detail == error.code


async def test_storage_error_becomes_opaque_500():
    @handle_runtime_errors(ERRMAP)
    async def fn():
        raise StorageError("connection refused to mongo:27017")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert e.value.detail == "internal_error"


async def test_handle_runtime_errors_happy_path_returns_value():
    @handle_runtime_errors({"x": HTTPStatus.BAD_REQUEST})
    async def ok():
        return "ok"
    assert await ok() == "ok"
