"""Admin key and form token verification for the settings surfaces."""

import hashlib
import hmac
import time

# Required to view or change plugin options
MANAGE_OPTIONS = "manage_options"

_HASH_SECRET = b"convert-to-blocks-admin-key-v1"

# A form token stays valid for one to two of these
NONCE_TICK_SECONDS = 12 * 60 * 60
NONCE_LENGTH = 10


def hash_api_key(api_key: str) -> str:
    """Hash an admin key using HMAC-SHA256.

    Both sides of a comparison are hashed first so the comparison always runs
    over equal-length digests.

    Args:
        api_key: The plaintext key to hash

    Returns:
        The hex-encoded HMAC-SHA256 hash
    """
    return hmac.new(
        _HASH_SECRET,
        api_key.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_api_key(provided_key: str, expected_key: str) -> bool:
    """Check a presented admin key against the configured one.

    Args:
        provided_key: Key presented by the client
        expected_key: Key from configuration

    Returns:
        True if the keys match, False otherwise
    """
    if not provided_key or not expected_key:
        return False
    return hmac.compare_digest(hash_api_key(provided_key), hash_api_key(expected_key))


def _nonce_tick(now: float | None) -> int:
    return int((time.time() if now is None else now) // NONCE_TICK_SECONDS)


def _nonce_for_tick(action: str, key: str, tick: int) -> str:
    message = f"{tick}|{action}".encode("utf-8")
    return hmac.new(key.encode("utf-8"), message, hashlib.sha256).hexdigest()[-12:-2]


def create_form_nonce(action: str, key: str, now: float | None = None) -> str:
    """Create the token an admin form carries for ``action``.

    Args:
        action: What the form does, e.g. ``"convert_to_blocks_settings-options"``
        key: Secret the token is derived from
        now: Timestamp to issue at, defaults to the current time

    Returns:
        A short hex token
    """
    return _nonce_for_tick(action, key, _nonce_tick(now))


def verify_form_nonce(
    nonce: str | None, action: str, key: str, now: float | None = None
) -> bool:
    """Check a submitted form token.

    Tokens issued in the current or the previous tick are accepted.
    """
    if not nonce or not key or len(nonce) != NONCE_LENGTH:
        return False
    tick = _nonce_tick(now)
    return any(
        hmac.compare_digest(nonce, _nonce_for_tick(action, key, candidate))
        for candidate in (tick, tick - 1)
    )
