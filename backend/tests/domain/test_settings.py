"""Tests for Settings defaults derived from other fields."""

import pytest

from club_api.core.config import Settings

pytestmark = pytest.mark.unit


def test_checkout_urls_follow_frontend_url():
    settings = Settings(frontend_url="https://club.example.test/", checkout_success_url="", checkout_cancel_url="")

    assert settings.checkout_success_url == "https://club.example.test/merch/success"
    assert settings.checkout_cancel_url == "https://club.example.test/merch/cancel"


def test_explicit_checkout_urls_kept():
    settings = Settings(
        frontend_url="https://club.example.test",
        checkout_success_url="https://shop.example.test/thanks",
        checkout_cancel_url="https://shop.example.test/cart",
    )

    assert settings.checkout_success_url == "https://shop.example.test/thanks"
    assert settings.checkout_cancel_url == "https://shop.example.test/cart"

