"""HTML bodies for outgoing club e-mail."""

from html import escape

from club_api.domain.checkout import Receipt, format_amount

OTP_SUBJECT = "OTP for COS Registration"
PURCHASE_SUBJECT = "Confirmation of Payment of Merchandise"

_CONTAINER_OPEN = '<div class="container" style="max-width: 90%; margin: auto; padding-top: 20px">'


def render_otp_email(code: str) -> str:
    return (
        f"{_CONTAINER_OPEN}"
        "<h2>Welcome to COS.</h2>"
        "<h4>You are officially In &#10004;</h4>"
        '<p style="margin-bottom: 30px;">Please enter the sign up OTP to get started</p>'
        f'<h1 style="font-size: 40px; letter-spacing: 2px; text-align:center;">{escape(code)}</h1>'
        "</div>"
    )


def render_receipt_lines(receipt: Receipt) -> str:
    """One paragraph per line item followed by the total."""
    rows = [
        f"<p>{line.quantity} x {escape(line.name)} ({format_amount(line.unit_amount)})</p>"
        for line in receipt.lines
    ]
    rows.append(f"<p>Total Amount: {format_amount(receipt.total_amount)}</p>")
    return "".join(rows)


def render_purchase_confirmation(receipt: Receipt) -> str:
    return (
        f"{_CONTAINER_OPEN}"
        "<h2>Welcome to COS.</h2>"
        "<h4>You have successfully completed a purchase with us!</h4>"
        "<p>Here are the details</p>"
        f"{render_receipt_lines(receipt)}"
        "</div>"
    )
