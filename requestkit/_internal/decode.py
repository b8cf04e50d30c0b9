"""Decoding of JSON response bodies into caller-owned targets."""

import inspect
import json
from collections.abc import MutableMapping, MutableSequence
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from requestkit.exceptions import DecodeError


def decode_into(target: Any, content: bytes, response: httpx.Response | None = None) -> None:
    """Decode JSON content into an existing object, in place.

    Supported targets:
        BaseModel instance: fields present in the payload are validated and
            assigned; absent fields keep their current values.
        Mutable mapping: updated with the decoded JSON object.
        Mutable sequence: contents replaced by the decoded JSON array.
        Any other object: keys of the decoded JSON object that name an
            existing data attribute are assigned. Methods are ignored.

    A JSON ``null`` body leaves any target as it is. The target is left
    untouched when decoding fails.

    Args:
        target: The object to populate.
        content: Raw response body.
        response: Response the body came from, attached to any error.

    Raises:
        DecodeError: If the content is not valid JSON, does not match the
            shape of the target, fails model validation, or cannot be
            assigned to the target.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"invalid JSON body: {e}", response=response) from e

    if data is None:
        return

    if isinstance(target, BaseModel):
        _decode_model(target, _expect_object(data, response), response)
    elif isinstance(target, MutableMapping):
        target.update(_expect_object(data, response))
    elif isinstance(target, MutableSequence):
        if not isinstance(data, list):
            raise DecodeError(f"expected a JSON array, got {type(data).__name__}", response=response)
        target[:] = data
    else:
        _decode_object(target, _expect_object(data, response), response)


def _expect_object(data: Any, response: httpx.Response | None) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}", response=response)
    return data


def _is_method(target: Any, key: str) -> bool:
    attr = inspect.getattr_static(type(target), key, None)
    return inspect.isfunction(attr) or isinstance(attr, (staticmethod, classmethod))


def _is_read_only(target: Any, key: str) -> bool:
    attr = inspect.getattr_static(type(target), key, None)
    return isinstance(attr, property) and attr.fset is None


def _decode_object(target: Any, values: dict[str, Any], response: httpx.Response | None) -> None:
    """Assign matching attributes, rolling back on the first failure."""
    matched = {
        key: value
        for key, value in values.items()
        if hasattr(target, key) and not _is_method(target, key)
    }
    read_only = [key for key in matched if _is_read_only(target, key)]
    if read_only:
        raise DecodeError(
            f"cannot assign {', '.join(read_only)} on {type(target).__name__}",
            response=response,
        )

    previous = {key: getattr(target, key) for key in matched}
    written: list[str] = []
    try:
        for key, value in matched.items():
            setattr(target, key, value)
            written.append(key)
    except (AttributeError, TypeError, ValueError) as e:
        failed = key
        for name in written:
            setattr(target, name, previous[name])
        raise DecodeError(
            f"cannot assign {failed} on {type(target).__name__}: {e}",
            response=response,
        ) from e


def _input_key(name: str, field: FieldInfo) -> str:
    """Key under which validation accepts a field."""
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    return field.alias or name


def _decode_model(target: BaseModel, values: dict[str, Any], response: httpx.Response | None) -> None:
    """Validate current values overlaid with the payload, then copy fields over."""
    model = type(target)
    if model.model_config.get("frozen"):
        raise DecodeError(f"cannot decode into frozen model {model.__name__}", response=response)

    fields = model.model_fields
    config = model.model_config
    by_name = bool(config.get("populate_by_name") or config.get("validate_by_name"))

    merged: dict[str, Any] = dict(target.model_extra or {})
    for name, field in fields.items():
        merged[_input_key(name, field)] = getattr(target, name)
    for key, value in values.items():
        field = fields.get(key)
        if by_name and field is not None:
            key = _input_key(key, field)
        merged[key] = value

    try:
        validated = model.model_validate(merged)
    except ValidationError as e:
        raise DecodeError(f"body does not match {model.__name__}: {e}", response=response) from e

    for name in fields:
        setattr(target, name, getattr(validated, name))
    for key, value in (validated.model_extra or {}).items():
        setattr(target, key, value)
