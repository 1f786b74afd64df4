"""Unit tests for domain administration"""

import pytest

from mailconfig.domains.service import (
    create_domain,
    get_accessible_domain,
    list_all_domains,
    list_allow_deny,
    list_domains,
    set_domain_flags,
)
from mailconfig.errors import NotFound, PermissionDenied, StoreFailure
from mailconfig.models.allow_deny import AllowDenyList
from mailconfig.models.domain import MailDomain


class TestGetAccessibleDomain:
    def test_owner_gets_domain(self, db_session, example_domain, alice_identity):
        assert get_accessible_domain(db_session, "example.com", alice_identity).id == example_domain.id

    def test_superuser_gets_any_domain(self, db_session, example_domain, root_identity):
        assert get_accessible_domain(db_session, "example.com", root_identity).id == example_domain.id

    def test_other_user_denied(self, db_session, example_domain, bob_identity):
        with pytest.raises(PermissionDenied) as exc_info:
            get_accessible_domain(db_session, "example.com", bob_identity)

        assert exc_info.value.subject == "example.com"

    def test_unknown_domain(self, db_session, alice_identity):
        with pytest.raises(NotFound) as exc_info:
            get_accessible_domain(db_session, "nowhere.test", alice_identity)

        assert exc_info.value.subject == "nowhere.test"


class TestCreateDomain:
    def test_defaults(self, db_session, root_identity, alice):
        domain = create_domain(db_session, root_identity, "new.test", owner="alice")

        assert domain.owner == alice.id
        assert domain.remotemx is None
        assert domain.sender_verify is True
        assert domain.grey_listing is False
        assert domain.virus_check is True
        assert domain.spamcheck_threshold == 100

    def test_owner_defaults_to_caller(self, db_session, root_identity):
        domain = create_domain(db_session, root_identity, "mine.test")

        assert domain.owner == root_identity.user_id

    def test_explicit_flags(self, db_session, root_identity):
        domain = create_domain(
            db_session, root_identity, "flags.test",
            remote_mx="mx.elsewhere.test", grey_listing=True, spamcheck_threshold=50,
        )

        assert domain.remotemx == "mx.elsewhere.test"
        assert domain.grey_listing is True
        assert domain.spamcheck_threshold == 50

    def test_non_superuser_denied(self, db_session, alice_identity):
        with pytest.raises(PermissionDenied) as exc_info:
            create_domain(db_session, alice_identity, "new.test")

        assert exc_info.value.subject == "You are not permitted to create domains"

    def test_unknown_owner(self, db_session, root_identity):
        with pytest.raises(NotFound) as exc_info:
            create_domain(db_session, root_identity, "new.test", owner="mallory")

        assert exc_info.value.subject == "Unknown user mallory"

    def test_duplicate_domain(self, db_session, root_identity, example_domain):
        with pytest.raises(StoreFailure):
            create_domain(db_session, root_identity, "example.com")


class TestSetDomainFlags:
    def test_owner_may_set_flags(self, db_session, example_domain, alice_identity):
        domain = set_domain_flags(db_session, alice_identity, "example.com", grey_listing=True, virus_check=False)

        assert domain.grey_listing is True
        assert domain.virus_check is False
        assert domain.sender_verify is True

    def test_other_user_denied(self, db_session, example_domain, bob_identity):
        with pytest.raises(PermissionDenied):
            set_domain_flags(db_session, bob_identity, "example.com", grey_listing=True)

    def test_empty_remote_mx_clears(self, db_session, example_domain, alice_identity):
        set_domain_flags(db_session, alice_identity, "example.com", remote_mx="mx.test")
        domain = set_domain_flags(db_session, alice_identity, "example.com", remote_mx="")

        assert domain.remotemx is None

    def test_owner_change_needs_superuser(self, db_session, example_domain, alice_identity, bob):
        with pytest.raises(PermissionDenied):
            set_domain_flags(db_session, alice_identity, "example.com", owner="bob")

    def test_superuser_reassigns_owner(self, db_session, example_domain, root_identity, bob):
        domain = set_domain_flags(db_session, root_identity, "example.com", owner="bob")

        assert domain.owner == bob.id

    def test_unknown_new_owner(self, db_session, example_domain, root_identity):
        with pytest.raises(NotFound) as exc_info:
            set_domain_flags(db_session, root_identity, "example.com", owner="mallory")

        assert exc_info.value.subject == "mallory"


class TestListing:
    def test_lists_only_own_domains(self, db_session, example_domain, alice_identity, root_identity):
        create_domain(db_session, root_identity, "b.test", owner="alice")
        create_domain(db_session, root_identity, "root.test")

        names = [d.domainname for d in list_domains(db_session, alice_identity)]
        assert names == ["b.test", "example.com"]

    def test_list_all_domains_ignores_owner(self, db_session, example_domain, root_identity):
        create_domain(db_session, root_identity, "root.test")
        create_domain(db_session, root_identity, "a.test", owner="alice")

        names = [d.domainname for d in list_all_domains(db_session)]
        assert names == ["a.test", "example.com", "root.test"]

    def test_allow_deny_split_and_sorted(self, db_session, example_domain):
        for allow, value in [(True, "z@x"), (False, "spam@x"), (True, "a@x"), (False, "bad@x")]:
            db_session.add(AllowDenyList(maildomain=example_domain.id, allow=allow, value=value))
        db_session.flush()

        allows, denys = list_allow_deny(db_session, example_domain)
        assert allows == ["a@x", "z@x"]
        assert denys == ["bad@x", "spam@x"]

    def test_domain_deletion_cascades(self, db_session, example_domain):
        db_session.add(AllowDenyList(maildomain=example_domain.id, allow=True, value="a@x"))
        db_session.commit()

        db_session.delete(example_domain)
        db_session.commit()

        assert db_session.query(AllowDenyList).count() == 0
        assert db_session.query(MailDomain).count() == 0
