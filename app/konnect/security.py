import hashlib
import hmac
import secrets

# scrypt parameters; changing them invalidates every stored hash
_SCRYPT_N = 16384
_SCRYPT_R = 8
_SCRYPT_P = 1
_KEY_LEN = 64
_SALT_BYTES = 16
_SEPARATOR = "."


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        dklen=_KEY_LEN,
    )


def hash_password(password: str) -> str:
    """Return "<hex derived key>.<hex salt>" for storage."""
    salt = secrets.token_hex(_SALT_BYTES)
    return f"{_derive(password, salt).hex()}{_SEPARATOR}{salt}"


def verify_password(password: str, stored: str) -> bool:
    """Constant-time check of a password against a value from hash_password()."""
    hashed, sep, salt = (stored or "").partition(_SEPARATOR)
    if not sep or not hashed or not salt:
        return False
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        return False
    if len(expected) != _KEY_LEN:
        return False
    return hmac.compare_digest(expected, _derive(password, salt))
