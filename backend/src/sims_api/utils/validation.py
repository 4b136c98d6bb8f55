"""Request body validation helpers."""

from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from sims_api.exceptions import InvalidPayloadError

ModelT = TypeVar("ModelT", bound=BaseModel)

MAX_BODY_BYTES = 16 * 1024


async def parse_json_body(request: Request, model: type[ModelT]) -> ModelT:
    """Validate the raw JSON body against ``model``.

    Parsing inside the handler, rather than as a FastAPI body parameter,
    keeps payload errors behind the authentication and role dependencies.

    Args:
        request: The incoming request
        model: Pydantic model to validate against

    Returns:
        Validated model instance

    Raises:
        InvalidPayloadError: If the body is empty, oversized, not JSON or invalid
    """
    raw = await request.body()
    if not raw or len(raw) > MAX_BODY_BYTES:
        raise InvalidPayloadError()
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidPayloadError() from e
