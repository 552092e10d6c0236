"""Tests for the booking permission policy."""

import pytest

from app.core.exceptions import MessageKey, PermissionDeniedError
from app.models.base import BookingStatus, UserRole
from app.services.booking.booking_permissions import (
    LIST_SCOPES,
    STATUS_TRANSITIONS,
    BookingScope,
    booking_list_scope,
    can_change_status,
    ensure_can_change_status,
)


class TestTransitionTable:
    def test_every_role_has_an_entry(self):
        assert set(STATUS_TRANSITIONS) == set(UserRole)
        assert set(LIST_SCOPES) == set(UserRole)

    @pytest.mark.parametrize("target", list(BookingStatus))
    def test_admin_may_set_any_status(self, target):
        assert can_change_status(UserRole.ADMIN, target)

    @pytest.mark.parametrize(
        "role, target, allowed",
        [
            (UserRole.CUSTOMER, BookingStatus.CANCELLED, True),
            (UserRole.CUSTOMER, BookingStatus.CONFIRMED, False),
            (UserRole.CUSTOMER, BookingStatus.PENDING, False),
            (UserRole.PARTNER, BookingStatus.CONFIRMED, True),
            (UserRole.PARTNER, BookingStatus.CANCELLED, False),
            (UserRole.PARTNER, BookingStatus.PENDING, False),
        ],
    )
    def test_restricted_roles(self, role, target, allowed):
        assert can_change_status(role, target) is allowed

    def test_missing_role_is_denied(self):
        assert not can_change_status(None, BookingStatus.CANCELLED)


class TestEnsureCanChangeStatus:
    def test_allowed_transition_passes(self):
        ensure_can_change_status(UserRole.PARTNER, BookingStatus.CONFIRMED)

    def test_rejected_target_is_named(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            ensure_can_change_status(UserRole.CUSTOMER, BookingStatus.CONFIRMED)

        error = exc_info.value
        assert error.message_key is MessageKey.USER_CANNOT_CHANGE_STATUS_TO
        assert "CONFIRMED" in error.message
        assert error.details["target"] == "CONFIRMED"
        assert error.status_code == 403

    def test_partner_cannot_cancel(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            ensure_can_change_status(UserRole.PARTNER, BookingStatus.CANCELLED)
        assert exc_info.value.message_key is MessageKey.USER_CANNOT_CHANGE_STATUS_TO
        assert "CANCELLED" in exc_info.value.message

    def test_unrecognised_role(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            ensure_can_change_status(None, BookingStatus.CANCELLED)
        assert exc_info.value.message_key is MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_CHANGE_STATUS


class TestListScope:
    @pytest.mark.parametrize(
        "role, scope",
        [
            (UserRole.ADMIN, BookingScope.ALL),
            (UserRole.PARTNER, BookingScope.PARTNER_HOTELS),
            (UserRole.CUSTOMER, BookingScope.OWN),
        ],
    )
    def test_scope_per_role(self, role, scope):
        assert booking_list_scope(role) is scope

    def test_missing_role_cannot_list(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            booking_list_scope(None)
        assert exc_info.value.message_key is MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_VIEW_BOOKINGS
