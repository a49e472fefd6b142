"""CheckoutService: merch checkout sessions and their fulfilment.

Flow:
- create_session: cart -> catalogue lookup -> gateway-hosted session URL
- handle_webhook: dispatch on event kind; only completed sessions act
- fulfil_session: re-fetch line items from the gateway, decrement stock,
  record the order, e-mail the receipt

Fulfilment is not idempotent unless dedupe_enabled is set: a redelivered
completion event decrements stock and sends the receipt again.
"""

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from club_api.core.exceptions import CheckoutError
from club_api.db.base import get_session_factory
from club_api.db.models.merch import Merch
from club_api.db.models.order import Order
from club_api.db.models.processed_checkout import ProcessedCheckout
from club_api.domain.checkout import LineItem, Receipt, build_receipt, to_minor_units
from club_api.domain.emails import PURCHASE_SUBJECT, render_purchase_confirmation
from club_api.schemas.merch import CartItem
from club_api.services.notifier import Notifier
from club_api.services.payment_gateway import (
    CHECKOUT_COMPLETED,
    CheckoutSession,
    GatewaySession,
    PaymentGateway,
    WebhookEnvelope,
)

logger = structlog.get_logger(__name__)


class CheckoutService:
    def __init__(
        self,
        gateway: PaymentGateway,
        notifier: Notifier,
        success_url: str,
        cancel_url: str,
        dedupe_enabled: bool = False,
    ) -> None:
        self.gateway = gateway
        self.notifier = notifier
        self.success_url = success_url
        self.cancel_url = cancel_url
        self.dedupe_enabled = dedupe_enabled

    # ------------------------------------------------------------------
    # Session initiation
    # ------------------------------------------------------------------

    async def build_line_items(self, cart: list[CartItem]) -> list[LineItem]:
        """Price the cart from the catalogue; client-sent prices are never used.

        Raises CheckoutError if the cart is empty or any item is unknown.
        """
        if not cart:
            raise CheckoutError("Cart is empty")

        ids = {entry.id for entry in cart}
        factory = get_session_factory()
        async with factory() as session:
            result = await session.execute(select(Merch).where(Merch.id.in_(list(ids))))
            catalogue = {merch.id: merch for merch in result.scalars().all()}

        line_items = []
        for entry in cart:
            merch = catalogue.get(entry.id)
            if merch is None:
                raise CheckoutError(f"Merch {entry.id} not found")
            line_items.append(
                LineItem(
                    name=merch.name,
                    quantity=entry.quantity,
                    unit_amount=to_minor_units(merch.price),
                )
            )
        return line_items

    async def create_session(self, cart: list[CartItem], email: str) -> CheckoutSession:
        """Request a hosted checkout session for the cart.

        Gateway failures propagate as PaymentGatewayError with the gateway's
        message; there is no retry.
        """
        line_items = await self.build_line_items(cart)
        checkout_session = await self.gateway.create_checkout_session(
            line_items=line_items,
            customer_email=email,
            success_url=self.success_url,
            cancel_url=self.cancel_url,
        )
        logger.info(
            "checkout_session_created",
            session_id=checkout_session.id,
            line_item_count=len(line_items),
        )
        return checkout_session

    # ------------------------------------------------------------------
    # Webhook fulfilment
    # ------------------------------------------------------------------

    async def handle_webhook(self, envelope: WebhookEnvelope) -> str:
        """Act on a verified webhook. Returns "fulfilled", "duplicate" or "ignored"."""
        if envelope.kind != CHECKOUT_COMPLETED:
            logger.info("stripe_webhook_ignored", event_type=envelope.kind)
            return "ignored"

        if not envelope.session_id:
            logger.warning("checkout_completed_missing_session_id")
            return "ignored"

        if self.dedupe_enabled and not await self._claim_session(envelope.session_id):
            logger.info("checkout_duplicate_delivery_ignored", session_id=envelope.session_id)
            return "duplicate"

        await self.fulfil_session(envelope.session_id)
        return "fulfilled"

    async def fulfil_session(self, session_id: str) -> Receipt:
        gateway_session = await self.gateway.retrieve_session(session_id)
        receipt = build_receipt(gateway_session.line_items)

        await self._decrement_inventory(receipt)

        if not gateway_session.customer_email:
            logger.warning("checkout_session_missing_email", session_id=session_id)
            return receipt

        await self._record_order(gateway_session, receipt)
        await self.notifier.send(
            PURCHASE_SUBJECT,
            render_purchase_confirmation(receipt),
            gateway_session.customer_email,
        )
        logger.info(
            "checkout_fulfilled",
            session_id=session_id,
            total_amount=receipt.total_amount,
            total_quantity=receipt.total_quantity,
        )
        return receipt

    async def _decrement_inventory(self, receipt: Receipt) -> None:
        """One atomic UPDATE per line, matched by product name.

        Stock is allowed to go negative; concurrent checkouts are not
        reserved against each other.
        """
        factory = get_session_factory()
        async with factory() as session:
            for line in receipt.lines:
                result = await session.execute(
                    update(Merch)
                    .where(Merch.name == line.name)
                    .values(quantity=Merch.quantity - line.quantity)
                )
                await session.commit()
                if result.rowcount == 0:
                    logger.warning("inventory_item_not_found", name=line.name, quantity=line.quantity)
                else:
                    logger.info("inventory_decremented", name=line.name, quantity=line.quantity)

    async def _record_order(self, gateway_session: GatewaySession, receipt: Receipt) -> None:
        factory = get_session_factory()
        async with factory() as session:
            session.add(
                Order(
                    email=gateway_session.customer_email,
                    items=[line.to_order_item() for line in receipt.lines],
                    checkout_session_id=gateway_session.id,
                )
            )
            await session.commit()

    async def _claim_session(self, session_id: str) -> bool:
        """Return True if this delivery claimed the session, False if already claimed."""
        factory = get_session_factory()
        async with factory() as session:
            try:
                session.add(ProcessedCheckout(session_id=session_id))
                await session.commit()
                return True
            except IntegrityError:
                await session.rollback()
                return False
