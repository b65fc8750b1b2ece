"""PBKDF2-SHA512 password hasher adapter."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import secrets

from user_directory.application.ports.password_hasher_port import (
    MalformedCredentialError,
    PasswordHasherPort,
)

DEFAULT_KEY_SIZE = 64
DEFAULT_ITERATIONS = 100_000
_HASH_NAME = "sha512"
_SEPARATOR = ";"


class Pbkdf2PasswordHasher(PasswordHasherPort):
    """Password hashing adapter using salted PBKDF2-HMAC-SHA512.

    Stored credentials have the form `base64(salt);base64(derived_key)`. Salt
    and derived key are both `key_size` bytes long. Passwords are UTF-8 encoded
    with lone surrogates passed through, so any `str` can be hashed. The
    iteration count is not part of the stored string, so changing it
    invalidates existing credentials.
    """

    def __init__(
        self,
        *,
        key_size: int = DEFAULT_KEY_SIZE,
        iterations: int = DEFAULT_ITERATIONS,
    ) -> None:
        if key_size <= 0:
            raise ValueError("key_size must be positive")
        if iterations <= 0:
            raise ValueError("iterations must be positive")
        self._key_size = key_size
        self._iterations = iterations

    def hash_password(self, password: str) -> str:
        salt = secrets.token_bytes(self._key_size)
        derived = self._derive(password, salt)
        encoded_salt = base64.b64encode(salt).decode("ascii")
        encoded_hash = base64.b64encode(derived).decode("ascii")
        return f"{encoded_salt}{_SEPARATOR}{encoded_hash}"

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        salt, expected = _split_credential(password_hash)
        actual = self._derive(password, salt)
        return hmac.compare_digest(expected, actual)

    def _derive(self, password: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac(
            _HASH_NAME,
            password.encode("utf-8", errors="surrogatepass"),
            salt,
            self._iterations,
            dklen=self._key_size,
        )


def _split_credential(password_hash: str) -> tuple[bytes, bytes]:
    """Decode salt and derived key, rejecting anything but two base64 fields."""

    tokens = password_hash.split(_SEPARATOR)
    if len(tokens) != 2:
        raise MalformedCredentialError(
            f"credential must have 2 fields, got {len(tokens)}"
        )
    encoded_salt, encoded_hash = tokens
    if not encoded_salt or not encoded_hash:
        raise MalformedCredentialError("credential fields cannot be empty")
    try:
        salt = base64.b64decode(encoded_salt, validate=True)
        expected = base64.b64decode(encoded_hash, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise MalformedCredentialError("credential is not valid base64") from exc
    return salt, expected
