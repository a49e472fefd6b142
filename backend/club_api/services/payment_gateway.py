"""Payment gateway collaborator: Stripe Checkout for merchandise.

The gateway owns checkout sessions; this service only creates them,
looks them up again when the completion webhook arrives, and reduces
webhook bodies to the two fields the API is allowed to trust.
"""

import json
from dataclasses import dataclass
from typing import Protocol

import stripe
import structlog

from club_api.core.exceptions import PaymentGatewayError, WebhookPayloadError
from club_api.domain.checkout import LineItem

logger = structlog.get_logger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"

# Page size when a session holds more line items than the expanded list returns
_LINE_ITEM_PAGE_SIZE = 100


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


@dataclass(frozen=True)
class GatewaySession:
    """Authoritative view of a session, fetched from the gateway."""

    id: str
    customer_email: str | None
    line_items: list[LineItem]


@dataclass(frozen=True)
class WebhookEnvelope:
    """The only webhook fields fulfilment may rely on.

    Anything else in the payload (amounts, line items, e-mail) is ignored
    and re-fetched from the gateway by session id.
    """

    kind: str
    session_id: str | None


class PaymentGateway(Protocol):
    async def create_checkout_session(
        self,
        line_items: list[LineItem],
        customer_email: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession: ...

    async def retrieve_session(self, session_id: str) -> GatewaySession: ...

    def parse_webhook(self, payload: bytes, signature: str | None) -> WebhookEnvelope: ...


def envelope_from_event(event: dict) -> WebhookEnvelope:
    """Reduce a decoded event (plain dict) to its trusted fields.

    Raises WebhookPayloadError when the type is missing or ``data.object``
    is not an object.
    """
    if not isinstance(event, dict):
        raise WebhookPayloadError("Invalid payload")

    kind = event.get("type")
    if not isinstance(kind, str) or not kind:
        raise WebhookPayloadError("Event type missing")

    data = event.get("data")
    data_object = data.get("object") if isinstance(data, dict) else None
    if not isinstance(data_object, dict):
        raise WebhookPayloadError("Invalid payload")

    session_id = None
    if kind.startswith("checkout.session."):
        session_id = data_object.get("id")
    return WebhookEnvelope(kind=kind, session_id=session_id)


def _line_item_from_stripe(item) -> LineItem:
    return LineItem(
        name=item["description"],
        quantity=int(item["quantity"] or 0),
        unit_amount=int(item["price"]["unit_amount"] or 0),
    )


class StripeGateway:
    """PaymentGateway backed by the stripe SDK's async calls.

    Credentials are passed per request so no global stripe state is set.
    """

    def __init__(self, api_key: str, webhook_secret: str = "", currency: str = "sgd") -> None:
        self._api_key = api_key
        self._webhook_secret = webhook_secret
        self._currency = currency

    async def create_checkout_session(
        self,
        line_items: list[LineItem],
        customer_email: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        try:
            session = await stripe.checkout.Session.create_async(
                api_key=self._api_key,
                mode="payment",
                payment_method_types=["card"],
                customer_email=customer_email,
                line_items=[
                    {
                        "price_data": {
                            "currency": self._currency,
                            "product_data": {"name": item.name},
                            "unit_amount": item.unit_amount,
                        },
                        "quantity": item.quantity,
                    }
                    for item in line_items
                ],
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as exc:
            logger.warning("stripe_create_session_failed", error=str(exc), error_type=type(exc).__name__)
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc

        return CheckoutSession(id=session.id, url=session.url)

    async def retrieve_session(self, session_id: str) -> GatewaySession:
        try:
            session = await stripe.checkout.Session.retrieve_async(
                session_id,
                api_key=self._api_key,
                expand=["line_items"],
            )
            listing = session.line_items
            items = [_line_item_from_stripe(item) for item in listing.data]

            while listing.has_more and listing.data:
                listing = await stripe.checkout.Session.list_line_items_async(
                    session_id,
                    api_key=self._api_key,
                    limit=_LINE_ITEM_PAGE_SIZE,
                    starting_after=listing.data[-1].id,
                )
                items.extend(_line_item_from_stripe(item) for item in listing.data)
        except stripe.StripeError as exc:
            logger.warning("stripe_retrieve_session_failed", session_id=session_id, error=str(exc))
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc

        email = session.customer_email
        if not email and session.customer_details:
            email = session.customer_details.email

        return GatewaySession(id=session.id, customer_email=email, line_items=items)

    def parse_webhook(self, payload: bytes, signature: str | None) -> WebhookEnvelope:
        """Verify (when a secret is configured) and decode a webhook body."""
        if self._webhook_secret:
            if not signature:
                raise WebhookPayloadError("Missing stripe-signature header")
            try:
                event = stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
            except ValueError:
                raise WebhookPayloadError("Invalid payload")
            except stripe.SignatureVerificationError:
                raise WebhookPayloadError("Invalid signature")
            # stripe.Event is not a dict subclass in current SDK releases
            return envelope_from_event(event.to_dict())

        logger.warning("stripe_webhook_unverified", reason="no_webhook_secret")
        try:
            event = json.loads(payload)
        except ValueError:
            raise WebhookPayloadError("Invalid payload")
        return envelope_from_event(event)
