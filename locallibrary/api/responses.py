"""Translate service outcomes into HTTP responses."""
from typing import Any, Sequence, Union

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from locallibrary.schemas.outcomes import (
    Deleted,
    NotFound,
    ReferenceBlocked,
    ValidationFailure,
)


def _dump(payload: Union[BaseModel, Sequence[BaseModel]]) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json")
    return [item.model_dump(mode="json") for item in payload]


def outcome_response(
    result: Union[BaseModel, Sequence[BaseModel]],
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Map a service result to a status code and JSON body.

    Validation failures are 422, missing records 404 and blocked deletes
    409; anything else is a success with ``success_status``.
    """
    if isinstance(result, ValidationFailure):
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation failed", **_dump(result)},
        )
    if isinstance(result, NotFound):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": result.message, **_dump(result)},
        )
    if isinstance(result, ReferenceBlocked):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": result.message, **_dump(result)},
        )
    if isinstance(result, Deleted):
        return JSONResponse(status_code=status.HTTP_200_OK, content=_dump(result))
    return JSONResponse(status_code=success_status, content=_dump(result))
