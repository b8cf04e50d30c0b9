"""Tests for decoding response bodies into targets."""

from dataclasses import dataclass

import httpx
import pytest
from pydantic import BaseModel, ConfigDict, Field

from requestkit._internal.decode import decode_into
from requestkit.exceptions import DecodeError


class Target(BaseModel):
    SomeValue: str = ""
    count: int = 0


class FrozenTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""


class AliasedTarget(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(default="", alias="itemId")


@dataclass
class PlainTarget:
    SomeValue: str = ""


class WithExcluded(BaseModel):
    name: str = ""
    secret: str = Field(default="", exclude=True)


class ExtraTarget(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = ""


class ReadOnlyProperty:
    def __init__(self):
        self.a = "original"

    @property
    def ro(self):
        return 1

    def describe(self):
        return "method"


class RejectingSetter:
    def __init__(self):
        self.a = "original"
        self._b = 0

    @property
    def b(self):
        return self._b

    @b.setter
    def b(self, value):
        if not isinstance(value, int):
            raise ValueError("b must be an int")
        self._b = value


class TestDecodeIntoModel:
    """Tests for decoding into pydantic models."""

    def test_populates_fields(self):
        """Should assign fields present in the payload."""
        target = Target()
        decode_into(target, b'{"SomeValue": "Propane and propane accessories"}')
        assert target.SomeValue == "Propane and propane accessories"

    def test_keeps_absent_fields(self):
        """Fields missing from the payload should keep their values."""
        target = Target(SomeValue="old", count=3)
        decode_into(target, b'{"SomeValue": "new"}')
        assert target.SomeValue == "new"
        assert target.count == 3

    def test_coerces_with_model_validation(self):
        """Values should go through the model's validation."""
        target = Target()
        decode_into(target, b'{"count": "7"}')
        assert target.count == 7

    def test_validation_failure_leaves_target_unmodified(self):
        """Should raise DecodeError and not touch the target."""
        target = Target(SomeValue="kept", count=1)
        with pytest.raises(DecodeError):
            decode_into(target, b'{"SomeValue": "changed", "count": "not a number"}')
        assert target.SomeValue == "kept"
        assert target.count == 1

    def test_alias(self):
        """Should honour field aliases."""
        target = AliasedTarget()
        decode_into(target, b'{"itemId": "abc"}')
        assert target.item_id == "abc"

    def test_field_name_with_populate_by_name(self):
        """A payload keyed by field name should win over the current value."""
        target = AliasedTarget(item_id="old")
        decode_into(target, b'{"item_id": "new"}')
        assert target.item_id == "new"

    def test_excluded_field_kept_when_absent(self):
        """Fields excluded from dumps should still keep their values."""
        target = WithExcluded(name="a", secret="keep-me")
        decode_into(target, b'{"name": "b"}')
        assert target.name == "b"
        assert target.secret == "keep-me"

    def test_extra_fields_kept_and_added(self):
        """Models allowing extras should keep old extras and gain new ones."""
        target = ExtraTarget(name="a", color="red")
        decode_into(target, b'{"size": 3}')
        assert target.name == "a"
        assert target.model_extra == {"color": "red", "size": 3}

    def test_frozen_model_rejected(self):
        """Frozen models cannot be populated in place."""
        with pytest.raises(DecodeError):
            decode_into(FrozenTarget(), b'{"name": "x"}')

    def test_array_payload_rejected(self):
        """A model target needs a JSON object."""
        with pytest.raises(DecodeError):
            decode_into(Target(), b"[1, 2]")


class TestDecodeIntoContainers:
    """Tests for decoding into dicts and lists."""

    def test_dict_is_updated(self):
        """Should merge the JSON object into the dict."""
        target = {"existing": 1}
        decode_into(target, b'{"SomeValue": "v"}')
        assert target == {"existing": 1, "SomeValue": "v"}

    def test_dict_rejects_array(self):
        """Should raise DecodeError when the body is not an object."""
        target: dict = {}
        with pytest.raises(DecodeError):
            decode_into(target, b"[1]")
        assert target == {}

    def test_list_is_replaced(self):
        """Should replace list contents with the JSON array."""
        target = ["stale"]
        decode_into(target, b'[{"a": 1}, {"a": 2}]')
        assert target == [{"a": 1}, {"a": 2}]

    def test_list_rejects_object(self):
        """Should raise DecodeError when the body is not an array."""
        target = ["stale"]
        with pytest.raises(DecodeError):
            decode_into(target, b'{"a": 1}')
        assert target == ["stale"]


class TestDecodeIntoObject:
    """Tests for decoding into plain objects."""

    def test_sets_existing_attributes(self):
        """Should assign keys that name existing attributes."""
        target = PlainTarget()
        decode_into(target, b'{"SomeValue": "v", "unknown": 1}')
        assert target.SomeValue == "v"
        assert not hasattr(target, "unknown")


class TestDecodeErrors:
    """Tests for malformed bodies."""

    def test_invalid_json(self):
        """Should raise DecodeError chained from the JSON error."""
        with pytest.raises(DecodeError) as exc_info:
            decode_into({}, b"not json")
        assert exc_info.value.__cause__ is not None

    def test_empty_body(self):
        """An empty body is not valid JSON."""
        with pytest.raises(DecodeError):
            decode_into({}, b"")

    def test_error_carries_response(self):
        """The response passed in should be attached to the error."""
        response = httpx.Response(200, content=b"not json")
        with pytest.raises(DecodeError) as exc_info:
            decode_into({}, b"not json", response=response)
        assert exc_info.value.response is response


class TestDecodeIntoObjectFailures:
    """Tests for plain-object targets that cannot take every value."""

    def test_read_only_property_rejected_before_writing(self):
        """Should raise DecodeError and not write any attribute."""
        target = ReadOnlyProperty()
        with pytest.raises(DecodeError):
            decode_into(target, b'{"a": "changed", "ro": 2}')
        assert target.a == "original"
        assert target.ro == 1

    def test_rejecting_setter_rolls_back(self):
        """Attributes written before a failing setter should be restored."""
        target = RejectingSetter()
        with pytest.raises(DecodeError) as exc_info:
            decode_into(target, b'{"a": "changed", "b": "not an int"}')
        assert target.a == "original"
        assert target.b == 0
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_methods_are_ignored(self):
        """Keys naming methods should be skipped, not assigned."""
        target = ReadOnlyProperty()
        decode_into(target, b'{"a": "changed", "describe": "x"}')
        assert target.a == "changed"
        assert target.describe() == "method"


class TestDecodeNull:
    """A JSON null body is a no-op."""

    @pytest.mark.parametrize(
        "target",
        [Target(SomeValue="kept"), {"SomeValue": "kept"}, ["kept"], PlainTarget(SomeValue="kept")],
    )
    def test_null_leaves_target_unchanged(self, target):
        """Should not raise or modify any kind of target."""
        before = target.model_copy() if isinstance(target, BaseModel) else repr(target)
        decode_into(target, b"null")
        if isinstance(target, BaseModel):
            assert target == before
        else:
            assert repr(target) == before
