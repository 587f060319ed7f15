import hmac
import json
from datetime import datetime, timedelta
from typing import Any

from jose import jws, jwt
from jose.exceptions import JWSError
from jose.utils import base64url_decode, base64url_encode

ALGORITHM = "HS256"


class SessionConfigError(RuntimeError):
    """Raised when a session family is built without a signing secret."""


class CredentialError(Exception):
    reason = "invalid"


class MalformedCredential(CredentialError):
    reason = "malformed"


class SignatureMismatch(CredentialError):
    reason = "signature_mismatch"


class ExpiredCredential(CredentialError):
    reason = "expired"


class RoleMismatch(CredentialError):
    reason = "role_mismatch"


def _require_secret(secret: str) -> str:
    if not secret:
        raise SessionConfigError("Session signing secret is not configured")
    return secret


def create_session_token(
    secret: str,
    now: datetime,
    lifetime: timedelta,
    role: str,
    subject: str | None = None,
) -> str:
    """
    Issue a compact HS256 JWS carrying `iat`, `exp` and `role` (plus `sub` when
    given). Segments are base64url so the `.` separator is unambiguous.
    """
    if lifetime <= timedelta(0):
        raise ValueError("Session lifetime must be positive")

    # NumericDate may be fractional; exp is exactly now + lifetime.
    expires_at = (now + lifetime).timestamp()
    claims: dict[str, Any] = {
        "iat": int(now.timestamp()),
        "exp": int(expires_at) if expires_at.is_integer() else expires_at,
        "role": role,
    }
    if subject is not None:
        claims["sub"] = str(subject)
    return jwt.encode(claims, _require_secret(secret), algorithm=ALGORITHM)


def _split_canonical(token: str) -> None:
    # Reject alternative encodings of the same bytes (e.g. flipped padding bits)
    # so every textual mutation of a token is observable.
    segments = token.split(".")
    if len(segments) != 3:
        raise MalformedCredential("Expected three token segments")
    for segment in segments:
        try:
            raw = segment.encode("ascii")
            decoded = base64url_decode(raw)
        except ValueError:
            raise MalformedCredential("Segment is not base64url") from None
        if base64url_encode(decoded) != raw:
            raise MalformedCredential("Segment is not canonically encoded")


def decode_session_token(secret: str, token: str, now: datetime) -> dict[str, Any]:
    """
    Return the claims of a valid token or raise a `CredentialError`.

    The signature is checked before any claim is read, so an unsigned or
    mis-signed payload never gets its `exp` trusted.
    """
    key = _require_secret(secret)
    if not isinstance(token, str) or not token:
        raise MalformedCredential("Empty token")
    _split_canonical(token)

    try:
        header = jws.get_unverified_header(token)
    except JWSError:
        raise MalformedCredential("Token could not be parsed") from None
    if header.get("alg") != ALGORITHM:
        raise MalformedCredential("Unexpected signing algorithm")

    # Structure and algorithm are known good here, so any failure is the MAC.
    try:
        payload = jws.verify(token, key, algorithms=[ALGORITHM])
    except JWSError:
        raise SignatureMismatch("Signature verification failed") from None

    try:
        claims = json.loads(payload)
    except ValueError:
        raise MalformedCredential("Payload is not JSON") from None
    if not isinstance(claims, dict):
        raise MalformedCredential("Payload is not an object")

    expires_at = claims.get("exp")
    if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
        raise MalformedCredential("Missing expiry")
    if now.timestamp() > expires_at:
        raise ExpiredCredential("Token expired")
    return claims


def verify_session_token(secret: str, token: str, now: datetime) -> bool:
    try:
        decode_session_token(secret, token, now)
    except CredentialError:
        return False
    return True


def verify_password(plain_password: str, configured_password: str) -> bool:
    """
    Constant-time comparison of a submitted password with the configured one.
    An unconfigured password never matches.
    """
    if not configured_password:
        return False
    return hmac.compare_digest(
        plain_password.encode("utf-8"), configured_password.encode("utf-8")
    )
