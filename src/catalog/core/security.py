"""Signing helpers for state carried in cookies."""

import base64
import hashlib
import hmac
import json
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from src.catalog.runtime.context import get_config


class FlashBag(BaseModel):
    """Data flashed to exactly one subsequent request."""

    errors: dict[str, list[str]] = Field(default_factory=dict)
    old_input: dict[str, str] = Field(default_factory=dict)

    def has_error(self, field: str) -> bool:
        return field in self.errors

    def first_error(self, field: str) -> str | None:
        messages = self.errors.get(field)
        return messages[0] if messages else None

    def old(self, field: str, default: Any = "") -> Any:
        return self.old_input.get(field, default)


def _secret_key() -> bytes:
    # Production configs without a secret are rejected when loaded
    secret = get_config().app.flash_signing_secret
    return secret.encode() if secret else b"dev-secret"


def sign_payload(payload: dict[str, Any]) -> str:
    """Serialize ``payload`` and append an HMAC so it can be trusted on return.

    Returns:
        ``<base64 json>.<hex digest>``
    """
    body = (
        base64.urlsafe_b64encode(
            json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8")
        )
        .decode("ascii")
        .rstrip("=")
    )
    signature = hmac.new(_secret_key(), body.encode("ascii"), hashlib.sha256).hexdigest()
    return f"{body}.{signature}"


def unsign_payload(token: str | None) -> dict[str, Any] | None:
    """Return the payload of a token made by ``sign_payload``, or None if tampered."""
    if not token or "." not in token:
        return None

    body, signature = token.rsplit(".", 1)
    if not body.isascii() or not signature.isascii():
        return None
    expected = hmac.new(_secret_key(), body.encode("ascii"), hashlib.sha256).hexdigest()
    if not hmac.compare_digest(signature, expected):
        logger.warning("Rejected flash cookie with invalid signature")
        return None

    try:
        padding = "=" * (-len(body) % 4)
        return json.loads(base64.urlsafe_b64decode((body + padding).encode("ascii")))
    except (ValueError, UnicodeDecodeError):
        return None


def encode_flash(flash: FlashBag) -> str:
    return sign_payload(flash.model_dump())


def decode_flash(token: str | None) -> FlashBag:
    payload = unsign_payload(token)
    if payload is None:
        return FlashBag()
    try:
        return FlashBag.model_validate(payload)
    except PydanticValidationError:
        return FlashBag()
