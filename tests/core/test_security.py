from datetime import timedelta

from lawdesk.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

SECRET = "test-secret"


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = get_password_hash("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)

    def test_salted(self):
        assert get_password_hash("same") != get_password_hash("same")

    def test_missing_or_malformed_hash(self):
        assert not verify_password("anything", None)
        assert not verify_password("anything", "not-a-bcrypt-hash")

    def test_long_passwords_accepted(self):
        long_password = "x" * 100
        assert verify_password(long_password, get_password_hash(long_password))


class TestAccessTokens:
    def test_round_trip(self):
        token = create_access_token({"id": "user-1", "role": "Admin"}, secret=SECRET)
        claims = decode_access_token(token, secret=SECRET)
        assert claims["id"] == "user-1"
        assert claims["role"] == "Admin"
        assert "exp" in claims

    def test_expired(self):
        token = create_access_token({"id": "user-1"}, expires_delta=timedelta(seconds=-10), secret=SECRET)
        assert decode_access_token(token, secret=SECRET) is None

    def test_tampered_signature(self):
        token = create_access_token({"id": "user-1"}, secret=SECRET)
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        assert decode_access_token(f"{header}.{payload}.{flipped}", secret=SECRET) is None

    def test_wrong_secret(self):
        token = create_access_token({"id": "user-1"}, secret=SECRET)
        assert decode_access_token(token, secret="other-secret") is None

    def test_garbage(self):
        assert decode_access_token("not.a.token", secret=SECRET) is None
