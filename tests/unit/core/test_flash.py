"""Tests for signed flash cookies."""

from src.catalog.core.security import (
    FlashBag,
    decode_flash,
    encode_flash,
    sign_payload,
    unsign_payload,
)
from src.catalog.runtime.config.config_data import AppConfig, ConfigData
from src.catalog.runtime.context import with_context


class TestSignedPayload:
    def test_token_is_cookie_safe(self):
        token = sign_payload({"errors": {"name": ["The name field is required."]}})

        assert "=" not in token
        assert " " not in token
        assert '"' not in token

    def test_signed_payload_is_returned(self):
        token = sign_payload({"a": 1})

        assert unsign_payload(token) == {"a": 1}

    def test_tampered_payload_is_rejected(self):
        token = sign_payload({"a": 1})
        body, signature = token.rsplit(".", 1)

        assert unsign_payload(f"{body}x.{signature}") is None
        assert unsign_payload(body) is None
        assert unsign_payload(None) is None

    def test_payload_signed_with_other_secret_is_rejected(self):
        token = sign_payload({"a": 1})

        with with_context(ConfigData(app=AppConfig(flash_signing_secret="rotated"))):
            assert unsign_payload(token) is None


class TestFlashBag:
    def test_roundtrip_keeps_errors_and_old_input(self):
        flash = FlashBag(errors={"name": ["Too short"]}, old_input={"name": "Pr"})

        decoded = decode_flash(encode_flash(flash))

        assert decoded == flash
        assert decoded.has_error("name")
        assert decoded.first_error("name") == "Too short"
        assert decoded.old("name") == "Pr"
        assert decoded.old("price", "1.00") == "1.00"

    def test_garbage_cookie_gives_empty_bag(self):
        assert decode_flash("not-a-token") == FlashBag()
