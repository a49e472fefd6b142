"""Tests for outgoing e-mail bodies."""

import pytest

from club_api.domain.checkout import LineItem, build_receipt
from club_api.domain.emails import (
    render_otp_email,
    render_purchase_confirmation,
    render_receipt_lines,
)

pytestmark = pytest.mark.unit


def test_otp_email_contains_code():
    html = render_otp_email("a1b2c3")

    assert "a1b2c3</h1>" in html
    assert "Welcome to COS." in html


def test_receipt_lines_in_order_with_total():
    receipt = build_receipt([LineItem("Club Tee", 2, 1000), LineItem("Cap", 1, 500)])

    assert render_receipt_lines(receipt) == (
        "<p>2 x Club Tee ($10.00)</p>"
        "<p>1 x Cap ($5.00)</p>"
        "<p>Total Amount: $25.00</p>"
    )


def test_product_names_are_escaped():
    receipt = build_receipt([LineItem("<b>Tee</b>", 1, 100)])

    html = render_purchase_confirmation(receipt)

    assert "<b>Tee</b>" not in html
    assert "&lt;b&gt;Tee&lt;/b&gt;" in html


def test_purchase_confirmation_wraps_receipt():
    receipt = build_receipt([LineItem("Cap", 3, 500)])

    html = render_purchase_confirmation(receipt)

    assert "You have successfully completed a purchase with us!" in html
    assert "<p>Total Amount: $15.00</p>" in html
