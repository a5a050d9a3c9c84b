from __future__ import annotations

import json
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from coiotlink.core.errors import EncodingError, SchemaError

ModelT = TypeVar("ModelT", bound=BaseModel)


def payload_text(payload: bytes) -> str:
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Payload not valid utf8: {exc}") from exc


def pretty_json(text: str) -> Optional[str]:
    """Re-indent ``text`` for error messages; ``None`` if it is not JSON."""
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except (ValueError, TypeError, RecursionError):
        return None


def decode_json_payload(payload: bytes, model: Type[ModelT]) -> ModelT:
    """
    Decode a JSON message body into ``model``.

    Raises:
        EncodingError: If the body is not UTF-8.
        SchemaError: If the JSON does not match the model. The offending
            document is attached pretty-printed when it parses as JSON.
    """
    text = payload_text(payload)
    try:
        return model.model_validate_json(text)
    except ValidationError as exc:
        raise SchemaError(
            f"Payload does not match {model.__name__}: {exc}",
            pretty=pretty_json(text),
        ) from exc
