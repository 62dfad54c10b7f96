"""Unit tests for AccessTokenRepository."""

import pytest
from insights.repositories.access_token import AccessTokenRepository
from insights.services._shared.ports.clock import to_epoch_ms
from tests.factories.access_token import AccessTokenFactory
from tests.factories.account import AccountFactory
from tests.helpers.utils import FROZEN_AT


class TestAccessTokenRepository:
    @pytest.fixture()
    def repo(self, session):
        return AccessTokenRepository(session=session)

    def test_get_by_token(self, repo):
        row = AccessTokenFactory()
        assert repo.get_by_token(row.token).id == row.id
        assert repo.get_by_token("does-not-exist") is None

    def test_delete_owned_requires_matching_owner(self, repo):
        row = AccessTokenFactory()
        stranger = AccountFactory()

        assert repo.delete_owned(row.id, stranger.id) == 0
        assert repo.get_by_token(row.token) is not None

        assert repo.delete_owned(row.id, row.account_id) == 1
        assert repo.get_by_token(row.token) is None

    def test_list_for_account_only_returns_own_tokens(self, repo):
        owner = AccountFactory()
        mine = [AccessTokenFactory(account_id=owner.id) for _ in range(2)]
        AccessTokenFactory()

        listed = repo.list_for_account(owner.id)
        assert sorted(t.id for t in listed) == sorted(t.id for t in mine)

    def test_expired_rows_counted_and_deleted(self, repo):
        now_ms = to_epoch_ms(FROZEN_AT)
        expired = AccessTokenFactory(expiry=now_ms - 1)
        boundary = AccessTokenFactory(expiry=now_ms)
        alive = AccessTokenFactory(expiry=now_ms + 1)

        assert repo.count_expired(now_ms) == 2
        assert repo.delete_expired(now_ms) == 2
        assert repo.get_by_token(expired.token) is None
        assert repo.get_by_token(boundary.token) is None
        assert repo.get_by_token(alive.token) is not None
