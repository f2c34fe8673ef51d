"""Tests for the Role value object."""

import pytest

from teampulse.domain.result import Err, Ok
from teampulse.domain.value_objects import Role


class TestRoleCreate:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("USER", Role.USER),
            ("admin", Role.ADMIN),
            ("  super_admin  ", Role.SUPER_ADMIN),
            (Role.ADMIN, Role.ADMIN),
        ],
    )
    def test_valid(self, raw, expected):
        assert Role.create(raw) == Ok(expected)

    @pytest.mark.parametrize("raw", ["", "   ", "GUEST", None])
    def test_invalid(self, raw):
        result = Role.create(raw)
        assert isinstance(result, Err)
        assert result.error.field == "role"

    def test_invalid_lists_allowed_roles(self):
        result = Role.create("guest")
        assert result.error.message == "Invalid role: GUEST. Must be one of: USER, ADMIN, SUPER_ADMIN"


class TestRoleHierarchy:
    def test_levels(self):
        assert Role.USER.level < Role.ADMIN.level < Role.SUPER_ADMIN.level

    def test_has_level_of(self):
        assert Role.SUPER_ADMIN.has_level_of(Role.ADMIN)
        assert Role.ADMIN.has_level_of(Role.ADMIN)
        assert not Role.USER.has_level_of(Role.ADMIN)

    def test_can_perform(self):
        assert Role.ADMIN.can_perform(Role.USER)
        assert not Role.ADMIN.can_perform(Role.SUPER_ADMIN)

    def test_helpers(self):
        assert Role.USER.is_user() and not Role.USER.is_admin()
        assert Role.ADMIN.is_admin() and not Role.ADMIN.is_super_admin()
        assert Role.SUPER_ADMIN.is_admin() and Role.SUPER_ADMIN.is_super_admin()

    def test_str(self):
        assert str(Role.SUPER_ADMIN) == "SUPER_ADMIN"
