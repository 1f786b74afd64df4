"""Test database table conventions and constraints.

Verifies the schema keeps entries, keys and tokens consistent even when a
writer bypasses the service layer.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from mailconfig.models import MailAuthToken, MailDomainKey, MailEntry

from ..conftest import ALICE_TOKEN, test_engine


EXPECTED_TABLES = {"mailuser", "maildomain", "mailentry", "mailauthtoken", "maildomainkey", "allowdenylist"}


def test_all_tables_created(db_session):
    assert EXPECTED_TABLES <= set(inspect(test_engine).get_table_names())


class TestEntryConstraints:
    def test_unknown_kind_rejected(self, db_session, example_domain):
        db_session.add(MailEntry(maildomain=example_domain.id, name="x", kind="forwarder", expansion="a@x"))

        with pytest.raises(IntegrityError):
            db_session.flush()

    def test_password_on_alias_rejected(self, db_session, example_domain):
        db_session.add(MailEntry(maildomain=example_domain.id, name="x", kind="alias", expansion="a@x", password="pw"))

        with pytest.raises(IntegrityError):
            db_session.flush()

    def test_expansion_on_login_rejected(self, db_session, example_domain):
        db_session.add(MailEntry(maildomain=example_domain.id, name="x", kind="login", password="pw", expansion="a@x"))

        with pytest.raises(IntegrityError):
            db_session.flush()

    def test_name_unique_per_domain(self, db_session, example_domain):
        db_session.add(MailEntry(maildomain=example_domain.id, name="x", kind="bouncer"))
        db_session.add(MailEntry(maildomain=example_domain.id, name="x", kind="blackhole"))

        with pytest.raises(IntegrityError):
            db_session.flush()


class TestUniqueness:
    def test_token_unique(self, db_session, alice, bob):
        db_session.add(MailAuthToken(mailuser=bob.id, token=ALICE_TOKEN, label="copy"))

        with pytest.raises(IntegrityError):
            db_session.flush()

    def test_selector_unique_per_domain(self, db_session, example_domain):
        for _ in range(2):
            db_session.add(MailDomainKey(maildomain=example_domain.id, selector="s", privkey="k", pubkey="p"))

        with pytest.raises(IntegrityError):
            db_session.flush()
