"""Secret key validation.

The secret key is reserved for encrypting sessions and other data before
it reaches the client. It is a 64-character hex string, for example the
output of::

    openssl rand -hex 32

If no key is configured a random one is generated at startup. That key
lives only as long as the process, so anything encrypted with it stops
decoding after a restart.
"""

import secrets

from boilerplate.errors import InvalidSecretKeyError

KEY_SIZE = 32

_WRONG_LENGTH = "Secret key has wrong length. Should be a 64-byte hex string"


def generate_secret_key() -> bytes:
    """Return ``KEY_SIZE`` fresh random bytes."""
    return secrets.token_bytes(KEY_SIZE)


def decode_secret_key(value: str) -> bytes:
    """Decode a hex secret key, requiring exactly ``KEY_SIZE`` bytes.

    Raises ``InvalidSecretKeyError`` for malformed hex or a wrong length.
    """
    try:
        key = bytes.fromhex(value)
    except ValueError as exc:
        raise InvalidSecretKeyError(
            f"Secret key is not a hex string: {exc}",
            field="secret_key_length",
            value=len(value),
        ) from exc
    if len(key) != KEY_SIZE:
        raise InvalidSecretKeyError(_WRONG_LENGTH, field="secret_key_length", value=len(value))
    return key


def get_secret_key(value: str | None) -> bytes:
    """Return the configured key, or a generated one if *value* is empty."""
    if not value:
        return generate_secret_key()
    return decode_secret_key(value.strip())
