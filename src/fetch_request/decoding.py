"""
JSON decoding of response bodies.
"""
import json
import logging
from functools import lru_cache
from typing import Any, Optional, Type, TypeVar, Union, overload

from pydantic import TypeAdapter, ValidationError

from .errors import DecodeError

logger = logging.getLogger("fetch_request.decoding")

T = TypeVar("T")


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


@overload
def decode_json(content: Union[bytes, str], target: None = None) -> Any: ...


@overload
def decode_json(content: Union[bytes, str], target: Type[T]) -> T: ...


def decode_json(content: Union[bytes, str], target: Optional[Any] = None) -> Any:
    """Decode a JSON document, optionally validating it into ``target``.

    ``target`` may be anything pydantic can validate: a BaseModel subclass,
    a dataclass, a TypedDict or a plain typing construct such as
    ``List[int]``. Without a target the parsed JSON value is returned as is.

    Raises DecodeError when the document is malformed or does not match
    the target shape.
    """
    try:
        if target is None:
            return json.loads(content)
        return _adapter(target).validate_json(content)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
        logger.debug(f"decode_json: failed for target={target!r}: {exc}")
        raise DecodeError(f"cannot decode response body: {exc}") from exc
