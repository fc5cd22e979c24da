"""Unit tests for the authorization capability."""

from __future__ import annotations

from blocked_numbers.kernel.security import AllowAllAuthorizer, Authorizer
from blocked_numbers.testing.fakes import FakeAuthorizer


class TestAuthorizers:
    def test_allow_all(self) -> None:
        authorizer: Authorizer = AllowAllAuthorizer()
        assert authorizer.can_block_numbers() is True

    def test_fake_switch(self) -> None:
        authorizer = FakeAuthorizer()
        assert authorizer.can_block_numbers()
        authorizer.deny_all()
        assert not authorizer.can_block_numbers()
        authorizer.allow_all()
        assert authorizer.can_block_numbers()
