"""
Tests for the User ORM entity.
"""

from datetime import datetime, timedelta, timezone

import pytest

from userapi.db.base import Base
from userapi.db.types import UTCDateTime
from userapi.models.user import User


class TestUserModel:
    """Tests for the mapped User entity."""

    def test_table_definition(self):
        table = Base.metadata.tables["users"]
        assert set(table.columns.keys()) == {"id", "name", "email", "created_at", "updated_at"}
        assert table.columns["email"].unique is True
        assert table.columns["id"].primary_key is True

    def test_email_is_normalized(self):
        user = User(name="Ada", email="  Ada@Example.COM ")
        assert user.email == "ada@example.com"

    def test_name_is_stripped(self):
        user = User(name="  Ada Lovelace  ", email="ada@example.com")
        assert user.name == "Ada Lovelace"

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            User(name="   ", email="ada@example.com")

    def test_timestamps_use_utc_type(self):
        table = Base.metadata.tables["users"]
        assert isinstance(table.columns["created_at"].type, UTCDateTime)
        assert isinstance(table.columns["updated_at"].type, UTCDateTime)

    def test_repr_has_no_name(self):
        user = User(id=1, name="Ada", email="ada@example.com")
        assert repr(user) == "User(id=1, email='ada@example.com')"


class TestUTCDateTime:
    """Tests for the UTC column type."""

    def test_naive_result_is_read_as_utc(self):
        value = UTCDateTime().process_result_value(datetime(2024, 1, 2, 3, 4, 5), None)
        assert value == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert value.utcoffset() == timedelta(0)

    def test_aware_value_is_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        value = UTCDateTime().process_bind_param(datetime(2024, 1, 2, 5, 0, tzinfo=plus_two), None)
        assert value == datetime(2024, 1, 2, 3, 0, tzinfo=timezone.utc)
        assert value.tzinfo == timezone.utc

    def test_none_passes_through(self):
        assert UTCDateTime().process_bind_param(None, None) is None
        assert UTCDateTime().process_result_value(None, None) is None
