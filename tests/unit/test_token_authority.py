"""Unit tests for bearer token resolution"""

import re

import pytest

from mailconfig.auth.tokens import generate_token_value, resolve_identity
from mailconfig.errors import AuthBadToken, AuthNoToken

from ..conftest import ALICE_TOKEN, ROOT_TOKEN


class TestResolveIdentity:
    @pytest.mark.parametrize("presented", [None, ""])
    def test_missing_token(self, db_session, presented):
        with pytest.raises(AuthNoToken) as exc_info:
            resolve_identity(db_session, presented)

        assert exc_info.value.category == "forbidden"

    @pytest.mark.parametrize("presented", ["nope", ALICE_TOKEN.upper(), ALICE_TOKEN + " "])
    def test_unknown_token(self, db_session, alice, presented):
        with pytest.raises(AuthBadToken) as exc_info:
            resolve_identity(db_session, presented)

        assert exc_info.value.token == presented

    def test_known_token_resolves_owner(self, db_session, alice):
        identity = resolve_identity(db_session, ALICE_TOKEN)

        assert identity.token == ALICE_TOKEN
        assert identity.user_id == alice.id
        assert identity.username == "alice"
        assert identity.is_superuser is False

    def test_superuser_flag_is_carried(self, db_session, root_user):
        assert resolve_identity(db_session, ROOT_TOKEN).is_superuser is True


class TestGenerateTokenValue:
    def test_format(self):
        assert re.fullmatch(r"[0-9a-f]{32}", generate_token_value())

    def test_values_are_unique(self):
        assert len({generate_token_value() for _ in range(100)}) == 100
