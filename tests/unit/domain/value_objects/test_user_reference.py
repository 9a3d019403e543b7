"""Tests for user reference normalization."""

from dataclasses import dataclass
from uuid import UUID

import pytest

from src.domain.value_objects.user_reference import resolve_user_id


@dataclass
class User:
    id: object


class TestResolveUserId:
    def test_string(self) -> None:
        assert resolve_user_id("user-1") == "user-1"

    def test_string_is_stripped(self) -> None:
        assert resolve_user_id("  user-1 ") == "user-1"

    def test_int(self) -> None:
        assert resolve_user_id(42) == "42"

    def test_uuid(self) -> None:
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert resolve_user_id(value) == "12345678-1234-5678-1234-567812345678"

    def test_object_with_id(self) -> None:
        """id属性を持つオブジェクトは生のIDと同じユーザーになること."""
        assert resolve_user_id(User(id="user-1")) == resolve_user_id("user-1")

    def test_object_with_nested_uuid(self) -> None:
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert resolve_user_id(User(id=value)) == str(value)

    @pytest.mark.parametrize("mapping", [{"id": "user-1"}, {"_id": "user-1"}])
    def test_mapping(self, mapping) -> None:
        assert resolve_user_id(mapping) == "user-1"

    def test_mapping_prefers_id(self) -> None:
        assert resolve_user_id({"id": "a", "_id": "b"}) == "a"

    def test_none_raises(self) -> None:
        with pytest.raises(ValueError):
            resolve_user_id(None)

    def test_empty_string_raises(self) -> None:
        with pytest.raises(ValueError):
            resolve_user_id("   ")

    def test_bool_raises(self) -> None:
        with pytest.raises(TypeError):
            resolve_user_id(True)

    def test_mapping_without_id_raises(self) -> None:
        with pytest.raises(TypeError):
            resolve_user_id({"name": "someone"})

    def test_object_without_id_raises(self) -> None:
        with pytest.raises(TypeError):
            resolve_user_id(object())

    def test_object_with_none_id_raises(self) -> None:
        with pytest.raises(TypeError):
            resolve_user_id(User(id=None))
