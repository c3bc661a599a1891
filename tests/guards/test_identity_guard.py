import pytest

from attendease.core.exceptions import IdentityChangePendingError
from attendease.guards.identity import IdentityChangeGuard


def test_changed_email_needs_a_second_save():
    guard = IdentityChangeGuard(original_email="a@x.com")

    with pytest.raises(IdentityChangePendingError):
        guard.confirm_save("b@x.com")
    assert guard.warning_raised

    guard.confirm_save("b@x.com")
    assert not guard.warning_raised


def test_unchanged_email_saves_immediately():
    guard = IdentityChangeGuard(original_email="a@x.com")

    guard.confirm_save("a@x.com")

    assert not guard.warning_raised


def test_editing_back_to_original_resets_warning():
    guard = IdentityChangeGuard(original_email="a@x.com")
    with pytest.raises(IdentityChangePendingError):
        guard.confirm_save("b@x.com")

    guard.email_edited("a@x.com")
    assert not guard.warning_raised

    with pytest.raises(IdentityChangePendingError):
        guard.confirm_save("b@x.com")
