"""Unit tests for mail credential encoding

Tests cover:
- Argon2id hashing with the {ARGON2ID} scheme tag
- Pass-through of already encoded values
- Rejection of empty and malformed values
- Failing loudly when hashing fails
"""

import pytest
from argon2 import PasswordHasher, Type
from argon2.exceptions import HashingError

from mailconfig.auth import password
from mailconfig.auth.password import SCHEME_TAG, encode_password, is_encoded
from mailconfig.errors import CredentialEncodingFailed, InvalidCredential


class TestEncodePassword:
    """Test hashing of plain text secrets"""

    def test_encoded_value_carries_scheme_tag(self):
        """Test stored value is the tag followed by an Argon2id PHC string"""
        stored = encode_password("correct horse battery staple")

        assert stored.startswith(SCHEME_TAG + "$argon2id$")
        assert "m=65536" in stored
        assert "t=3" in stored
        assert "p=4" in stored

    def test_encoded_value_verifies_without_pepper(self):
        """Test the mail server can verify the hash with plain Argon2"""
        stored = encode_password("s3cret")

        assert PasswordHasher().verify(stored[len(SCHEME_TAG):], "s3cret") is True

    def test_same_secret_gives_different_hashes(self):
        """Test a fresh salt is used every time"""
        assert encode_password("s3cret") != encode_password("s3cret")

    def test_empty_secret_rejected(self):
        with pytest.raises(InvalidCredential) as exc_info:
            encode_password("")

        assert exc_info.value.category == "bad-request"


class TestPassThrough:
    """Test already encoded values are not hashed twice"""

    def test_encoded_value_is_returned_unchanged(self):
        stored = encode_password("s3cret")

        assert encode_password(stored) == stored

    def test_encoding_is_idempotent(self):
        once = encode_password("s3cret")
        assert encode_password(encode_password(once)) == once

    def test_tagged_garbage_is_rejected(self):
        """Test a tag followed by something that is not a PHC string"""
        with pytest.raises(InvalidCredential):
            encode_password(SCHEME_TAG + "not-a-hash")

    def test_tagged_hash_without_salt_or_digest_is_rejected(self):
        with pytest.raises(InvalidCredential):
            encode_password(SCHEME_TAG + "$argon2id$v=19$m=1,t=1,p=1$$")

    def test_tagged_argon2i_hash_is_rejected(self):
        """Test the tag only vouches for Argon2id"""
        argon2i = PasswordHasher(type=Type.I).hash("s3cret")

        with pytest.raises(InvalidCredential):
            encode_password(SCHEME_TAG + argon2i)

    def test_untagged_phc_string_is_hashed(self):
        """Test a bare PHC string is treated as a plain secret"""
        bare = PasswordHasher().hash("s3cret")
        stored = encode_password(bare)

        assert stored != bare
        assert PasswordHasher().verify(stored[len(SCHEME_TAG):], bare) is True


class TestIsEncoded:
    def test_detects_encoded_value(self):
        assert is_encoded(encode_password("s3cret")) is True

    @pytest.mark.parametrize("value", [
        "",
        "s3cret",
        SCHEME_TAG,
        SCHEME_TAG + "$argon2id$broken",
        SCHEME_TAG + "$argon2id$v=19$m=1,t=1,p=1$$",
        SCHEME_TAG + "$argon2id$v=19$m=16,t=1,p=1$c2FsdHNhbHQ$aGFzaGhhc2hoYXNoaGFzaA",
    ])
    def test_rejects_other_values(self, value):
        assert is_encoded(value) is False


class TestHashingFailure:
    """Test hashing failures surface instead of storing the raw secret"""

    def test_hashing_error_raises_server_error(self, monkeypatch):
        class FailingHasher:
            def hash(self, secret):
                raise HashingError("out of memory")

        monkeypatch.setattr(password, "_hasher", FailingHasher())

        with pytest.raises(CredentialEncodingFailed) as exc_info:
            encode_password("s3cret")

        assert exc_info.value.category == "server-error"
        assert exc_info.value.status_code == 500
