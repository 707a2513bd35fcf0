"""Decoding of raw response bodies into catalog models.

Every decode goes through ``try_decode``, which validates a record against
its pydantic model and returns a tagged ``DecodeResult`` instead of raising.
The ``decode_*`` helpers unwrap that result for callers that prefer
exceptions.
"""

import json
from dataclasses import dataclass
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from ..errors import DecodeFailure
from ..models.character import Character
from ..models.episode import Episode


EntityModel = TypeVar("EntityModel", Character, Episode)


@dataclass(frozen=True)
class DecodeResult(Generic[EntityModel]):
    """Either a decoded value or the failure that prevented decoding."""

    value: Optional[EntityModel] = None
    error: Optional[DecodeFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> EntityModel:
        """Return the decoded value or raise the recorded DecodeFailure."""
        if self.error is not None:
            raise self.error
        return self.value


def try_decode(
    model: Type[EntityModel],
    record: Any,
    endpoint: Optional[str] = None,
) -> DecodeResult[EntityModel]:
    """Decode one raw record into ``model`` without raising."""
    if not isinstance(record, Mapping):
        return DecodeResult(error=DecodeFailure(
            f"Expected a {model.__name__} record, got {type(record).__name__}",
            endpoint=endpoint,
        ))

    try:
        return DecodeResult(value=model.from_api(record))
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(part) for part in first_error["loc"])
        failure = DecodeFailure(
            f"Invalid {model.__name__} record ({field}): {first_error['msg']}",
            endpoint=endpoint,
        )
        failure.__cause__ = e
        return DecodeResult(error=failure)


def decode_character(record: Mapping[str, Any]) -> Character:
    return try_decode(Character, record).unwrap()


def decode_episode(record: Mapping[str, Any]) -> Episode:
    return try_decode(Episode, record).unwrap()


def decode_many(
    model: Type[EntityModel],
    body: Union[List[Any], Mapping[str, Any], Any],
    endpoint: Optional[str] = None,
) -> List[EntityModel]:
    """
    Decode a body that is either a list of records or a single record.

    The batch endpoints return a bare object instead of a one-element array
    when exactly one identifier resolves, so both shapes are accepted.

    Args:
        model: Model to decode each record into
        body: Parsed JSON body
        endpoint: Endpoint name, used in error messages

    Returns:
        List of decoded models in body order

    Raises:
        DecodeFailure: If the body is neither a list nor a record, or any record is invalid
    """
    if isinstance(body, Mapping):
        records = [body]
    elif isinstance(body, (list, tuple)):
        records = list(body)
    else:
        raise DecodeFailure(
            f"Expected a list or a {model.__name__} record, got {type(body).__name__}",
            endpoint=endpoint,
        )

    return [try_decode(model, record, endpoint).unwrap() for record in records]


def parse_json(text: str, endpoint: Optional[str] = None) -> Any:
    """Parse a response body, converting JSON syntax errors into DecodeFailure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeFailure(f"Malformed JSON from {endpoint or 'catalog'}: {e.msg}", endpoint=endpoint) from e
