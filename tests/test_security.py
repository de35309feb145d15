import re

from app.konnect.security import hash_password, verify_password


def test_hash_format_is_hex_key_dot_hex_salt():
    stored = hash_password("secret123")
    key, salt = stored.split(".")
    assert re.fullmatch(r"[0-9a-f]{128}", key)
    assert re.fullmatch(r"[0-9a-f]{32}", salt)


def test_verify_roundtrip():
    stored = hash_password("secret123")
    assert verify_password("secret123", stored) is True
    assert verify_password("secret124", stored) is False


def test_salt_is_random_per_hash():
    assert hash_password("same-password") != hash_password("same-password")


def test_malformed_stored_values_never_verify():
    for stored in ("", "nodot", "zz.abcd", "abcd.", ".abcd", "abcd.ef"):
        assert verify_password("anything", stored) is False
