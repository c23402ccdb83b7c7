"""Helpers for decoding request bodies and writing JSON responses."""

import logging
from typing import Any, Optional, Type, TypeVar

from fastapi import Request, Response, status
from pydantic import BaseModel, PydanticSchemaGenerationError, TypeAdapter, ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from chirpy.api.request_models import ErrorResponse
from chirpy.errors import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


async def read_body(request: Request) -> bytes:
    """Raw request body (dependency, so handlers themselves can stay synchronous)."""
    return await request.body()


def decode_json(raw: bytes, model: Type[M]) -> M:
    """Decode a JSON request body into `model`.

    Raises:
        DecodeError: If the body is not JSON or does not match the model
    """
    try:
        return model.model_validate_json(raw or b"")
    except PydanticValidationError as e:
        raise DecodeError(f"invalid {model.__name__}: {e.error_count()} error(s)") from e


def respond_with_json(status_code: int, payload: T, payload_type: Optional[Type[Any]] = None) -> Response:
    """Serialize `payload` with pydantic and wrap it in a JSON response.

    `payload_type` is needed for containers (e.g. ``List[Chirp]``); otherwise the
    payload's own type is used. A payload that cannot be serialized yields a bare 500.
    """
    try:
        content = TypeAdapter(payload_type or type(payload)).dump_json(payload)
    except (PydanticSerializationError, PydanticSchemaGenerationError) as e:
        logger.error(f"Error marshalling JSON: {e}")
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(content=content, status_code=status_code, media_type="application/json")


def respond_with_error(status_code: int, message: str) -> Response:
    return respond_with_json(status_code, ErrorResponse(error=message))


def json_request_body(model: Type[BaseModel]) -> dict:
    """OpenAPI ``requestBody`` for a route that decodes `model` itself via :func:`decode_json`."""
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}},
            "required": True,
        }
    }
