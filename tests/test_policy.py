"""
tests.test_policy

Authorization checks over the request identity.
"""

from __future__ import annotations

import pytest

from jobly.auth.models import Identity
from jobly.auth.policy import require_admin, require_admin_or_self, require_logged_in
from jobly.errors import UnauthorizedError

USER = Identity(username="test", is_admin=False, iat=0)
ADMIN = Identity(username="adminuser", is_admin=True, iat=0)


def test_logged_in_passes_with_identity() -> None:
    assert require_logged_in(USER) is USER


def test_logged_in_denies_anonymous() -> None:
    with pytest.raises(UnauthorizedError):
        require_logged_in(None)


def test_admin_passes_for_admin() -> None:
    assert require_admin(ADMIN) is ADMIN


@pytest.mark.parametrize("identity", [USER, None])
def test_admin_denies_non_admin_and_anonymous(identity: Identity | None) -> None:
    with pytest.raises(UnauthorizedError):
        require_admin(identity)


def test_admin_or_self_passes_for_admin() -> None:
    assert require_admin_or_self(ADMIN, "test") is ADMIN


def test_admin_or_self_passes_for_self() -> None:
    assert require_admin_or_self(USER, "test") is USER


def test_admin_or_self_denies_other_user() -> None:
    other = Identity(username="test2", is_admin=False, iat=0)
    with pytest.raises(UnauthorizedError):
        require_admin_or_self(other, "test")


def test_admin_or_self_denies_anonymous() -> None:
    with pytest.raises(UnauthorizedError):
        require_admin_or_self(None, "test")


def test_denial_maps_to_401() -> None:
    with pytest.raises(UnauthorizedError) as excinfo:
        require_admin(USER)
    assert excinfo.value.status_code == 401
