"""Tests for password hashing and token issue/validation."""

import string
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from smartmenu.core.errors import BadSignature, Expired, Malformed, Unsupported
from smartmenu.core.security import TokenIssuer, get_password_hash, verify_password

SECRET = "unit-test-signing-key-0123456789abcdef0123456789abcdef0123456789"
T0 = datetime(2024, 1, 15, 14, 30, 22, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _issuer(clock=None, ttl=timedelta(hours=24)) -> TokenIssuer:
    return TokenIssuer(SECRET, ttl=ttl, clock=clock)


# ============== Password hashing ==============

class TestPasswordHashing:
    def test_hash_and_verify(self):
        h = get_password_hash("secret123")
        assert verify_password("secret123", h)

    def test_wrong_password_rejected(self):
        h = get_password_hash("secret123")
        assert not verify_password("wrong", h)

    def test_hash_is_unique(self):
        h1 = get_password_hash("same")
        h2 = get_password_hash("same")
        assert h1 != h2  # different salts

    def test_hash_does_not_contain_plaintext(self):
        assert "secret123" not in get_password_hash("secret123")

    def test_invalid_hash_returns_false(self):
        assert not verify_password("test", "not-a-hash")

    def test_empty_hash_returns_false(self):
        assert not verify_password("test", "")


# ============== Token issue / validate ==============

class TestTokenIssuer:
    def test_round_trip(self):
        issuer = _issuer()
        assert issuer.validate(issuer.issue("alice")) == "alice"

    def test_wire_format_is_three_segments(self):
        token = _issuer().issue("alice")
        assert token.count(".") == 2

    def test_payload_claims(self):
        token = _issuer(clock=FakeClock(T0)).issue("alice")
        payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        assert payload["sub"] == "alice"
        assert payload["iat"] == int(T0.timestamp())
        assert payload["exp"] == int((T0 + timedelta(hours=24)).timestamp())

    def test_valid_until_ttl_elapses(self):
        clock = FakeClock(T0)
        issuer = _issuer(clock=clock)
        token = issuer.issue("alice")

        clock.now = T0 + timedelta(hours=24)
        assert issuer.validate(token) == "alice"

        clock.now = T0 + timedelta(hours=24, seconds=1)
        with pytest.raises(Expired):
            issuer.validate(token)

    def test_tampered_signature_rejected(self):
        issuer = _issuer()
        token = issuer.issue("alice")
        header, payload, signature = token.split(".")
        for i in range(len(signature)):
            replacement = "A" if signature[i] != "A" else "B"
            tampered = signature[:i] + replacement + signature[i + 1:]
            with pytest.raises(BadSignature):
                issuer.validate(f"{header}.{payload}.{tampered}")

    def test_every_variant_of_last_signature_char_rejected(self):
        issuer = _issuer()
        header, payload, signature = issuer.issue("alice").split(".")
        alphabet = string.ascii_letters + string.digits + "-_"
        for char in alphabet.replace(signature[-1], ""):
            with pytest.raises(BadSignature):
                issuer.validate(f"{header}.{payload}.{signature[:-1]}{char}")

    @pytest.mark.parametrize("char", ["!", "=", "+", "/", "\u00e9"])
    def test_non_alphabet_signature_char_rejected(self, char):
        issuer = _issuer()
        header, payload, signature = issuer.issue("alice").split(".")
        tampered = signature[:5] + char + signature[6:]
        with pytest.raises(BadSignature):
            issuer.validate(f"{header}.{payload}.{tampered}")

    def test_truncated_signature_rejected(self):
        issuer = _issuer()
        token = issuer.issue("alice")
        with pytest.raises(BadSignature):
            issuer.validate(token[:-1])

    def test_other_key_rejected(self):
        token = TokenIssuer("another-signing-key-0123456789abcdef0123456789abcdef01").issue("alice")
        with pytest.raises(BadSignature):
            _issuer().validate(token)

    def test_tampered_payload_rejected(self):
        issuer = _issuer()
        header, _, signature = issuer.issue("alice").split(".")
        forged = jwt.encode({"sub": "mallory", "iat": 0, "exp": 9999999999}, "x" * 64).split(".")[1]
        with pytest.raises(BadSignature):
            issuer.validate(f"{header}.{forged}.{signature}")

    @pytest.mark.parametrize("token", ["", "abc", "not.a.token", "a.b", "a.b.c.d", "..sig"])
    def test_malformed(self, token):
        with pytest.raises(Malformed):
            _issuer().validate(token)

    def test_missing_expiry_is_malformed(self):
        token = jwt.encode({"sub": "alice", "iat": int(T0.timestamp())}, SECRET, algorithm="HS256")
        with pytest.raises(Malformed):
            _issuer().validate(token)

    def test_empty_subject_is_malformed(self):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode({"sub": "", "iat": now, "exp": now + 60}, SECRET, algorithm="HS256")
        with pytest.raises(Malformed):
            _issuer().validate(token)

    def test_other_algorithm_unsupported(self):
        token = TokenIssuer(SECRET, algorithm="HS512").issue("alice")
        with pytest.raises(Unsupported):
            _issuer().validate(token)

    def test_empty_key_refused(self):
        with pytest.raises(ValueError):
            TokenIssuer("")

    def test_asymmetric_algorithm_refused(self):
        with pytest.raises(ValueError):
            TokenIssuer(SECRET, algorithm="RS256")

    def test_empty_subject_refused(self):
        with pytest.raises(ValueError):
            _issuer().issue("")
