"""Tests for grant resolution (admin bypass and explicit permission rows)."""

import pytest

from fastapi import HTTPException

from app.access_control import (
    FULL_ACCESS,
    NO_ACCESS,
    Grant,
    get_studio_grant,
    require_control,
    require_view,
    resolve_grant,
)
from app.models import UserRole, UserStudioPermission


class TestResolveGrant:
    def test_admin_has_full_access_without_permission_row(self):
        assert resolve_grant(UserRole.ADMIN.value, None) == FULL_ACCESS

    def test_admin_ignores_restrictive_row(self):
        row = UserStudioPermission(can_view=False, can_control=False)

        assert resolve_grant(UserRole.ADMIN.value, row) == FULL_ACCESS

    @pytest.mark.parametrize("role", [UserRole.OPERATOR.value, UserRole.VIEWER.value])
    def test_non_admin_without_row_has_no_access(self, role):
        assert resolve_grant(role, None) == NO_ACCESS

    def test_view_only_row(self):
        row = UserStudioPermission(can_view=True, can_control=False)

        assert resolve_grant(UserRole.VIEWER.value, row) == Grant(can_view=True, can_control=False)

    def test_view_and_control_row(self):
        row = UserStudioPermission(can_view=True, can_control=True)

        assert resolve_grant(UserRole.OPERATOR.value, row) == Grant(can_view=True, can_control=True)


class TestRequire:
    def test_require_view_rejects_with_forbidden(self):
        with pytest.raises(HTTPException) as exc_info:
            require_view(NO_ACCESS)

        assert exc_info.value.status_code == 403

    def test_view_only_grant_passes_view_but_not_control(self):
        grant = Grant(can_view=True, can_control=False)

        require_view(grant)
        with pytest.raises(HTTPException) as exc_info:
            require_control(grant)

        assert exc_info.value.status_code == 403


class TestGetStudioGrant:
    def test_reads_permission_row(self, db, make_user, make_studio, grant):
        user = make_user("operator", role=UserRole.OPERATOR)
        studio = make_studio("Plex")
        grant(user, studio, can_view=True, can_control=True)

        assert get_studio_grant(db, user, studio.id) == Grant(can_view=True, can_control=True)

    def test_other_studio_is_not_granted(self, db, make_user, make_studio, grant):
        user = make_user("operator", role=UserRole.OPERATOR)
        granted = make_studio("Plex")
        other = make_studio("Irving")
        grant(user, granted)

        assert get_studio_grant(db, user, other.id) == NO_ACCESS

    def test_admin_needs_no_row(self, db, admin, make_studio):
        studio = make_studio("Irving")

        assert get_studio_grant(db, admin, studio.id) == FULL_ACCESS

    def test_admin_shortcut_matches_resolve_grant(self, db, admin, make_studio, grant):
        studio = make_studio("Irving")
        row = grant(admin, studio, can_view=False, can_control=False)

        assert get_studio_grant(db, admin, studio.id) == resolve_grant(admin.role, row)
