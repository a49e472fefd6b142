"""Merch routes: catalogue CRUD plus Stripe Checkout and its webhook."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import delete, select

from club_api.api.deps import get_checkout_service
from club_api.core.exceptions import CheckoutError, PaymentGatewayError, WebhookPayloadError
from club_api.db.base import get_session_factory
from club_api.db.models.merch import Merch
from club_api.schemas.common import ApiResponse, fail, ok
from club_api.schemas.merch import (
    CheckoutRequest,
    CheckoutSessionData,
    MerchCreate,
    MerchResponse,
    MerchUpdate,
)
from club_api.services.checkout_service import CheckoutService

logger = structlog.get_logger(__name__)

router = APIRouter()

DUPLICATE_NAME = "Merch Name already exists"
NOT_FOUND = "No such merch exists"


async def _name_taken(session, name: str) -> bool:
    result = await session.execute(select(Merch.id).where(Merch.name == name).limit(1))
    return result.scalar_one_or_none() is not None


# ── Catalogue ───────────────────────────────────────────────────────


@router.post("", response_model=ApiResponse[MerchResponse])
async def create_merch(body: MerchCreate):
    """Create a merch item; names must be unique (stock is matched by name)."""
    factory = get_session_factory()
    async with factory() as session:
        if await _name_taken(session, body.name):
            return fail(DUPLICATE_NAME)

        merch = Merch(**body.model_dump())
        session.add(merch)
        await session.commit()
        await session.refresh(merch)

    logger.info("merch_created", merch_id=merch.id)
    return ok("Merch created successfully", MerchResponse.model_validate(merch))


@router.get("", response_model=ApiResponse[list[MerchResponse]])
async def list_merch():
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(select(Merch).order_by(Merch.name))
        items = result.scalars().all()

    if not items:
        return fail("No merches found")
    return ok("Merches found", [MerchResponse.model_validate(m) for m in items])


@router.put("/{merch_id}", response_model=ApiResponse[MerchResponse])
async def update_merch(merch_id: str, body: MerchUpdate):
    """Partial update; the name is re-checked only when it changes."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    factory = get_session_factory()
    async with factory() as session:
        merch = await session.get(Merch, merch_id)
        if merch is None:
            return fail(NOT_FOUND)

        new_name = changes.get("name")
        if new_name is not None and new_name != merch.name and await _name_taken(session, new_name):
            return fail(DUPLICATE_NAME)

        for field, value in changes.items():
            setattr(merch, field, value)
        await session.commit()
        await session.refresh(merch)

    return ok("Merch updated successfully", MerchResponse.model_validate(merch))


@router.delete("/{merch_id}", response_model=ApiResponse[None])
async def delete_merch(merch_id: str):
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(delete(Merch).where(Merch.id == merch_id))
        await session.commit()

    if result.rowcount == 0:
        return fail(NOT_FOUND)

    logger.info("merch_deleted", merch_id=merch_id)
    return ok("Merch deleted successfully")


# ── Checkout ────────────────────────────────────────────────────────


@router.post("/createCheckoutSession", response_model=ApiResponse[CheckoutSessionData])
async def create_checkout_session(
    body: CheckoutRequest,
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Price the cart from the catalogue and return a hosted checkout URL."""
    try:
        session = await checkout.create_session(body.items, body.email)
    except (CheckoutError, PaymentGatewayError) as exc:
        return fail(str(exc))

    return ok("Successful", CheckoutSessionData(url=session.url, session_id=session.id))


@router.post("/stripeWebHook", response_model=ApiResponse[None])
async def stripe_webhook(
    request: Request,
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Receive Stripe events.

    The raw body is read as bytes so the signature covers exactly what Stripe
    sent. Every verified event is acknowledged with 200, including when
    fulfilment fails part-way; Stripe redelivery is the only recovery.
    """
    body = await request.body()
    signature = request.headers.get("stripe-signature")

    try:
        envelope = checkout.gateway.parse_webhook(body, signature)
    except WebhookPayloadError as exc:
        logger.warning("stripe_webhook_rejected", reason=exc.reason)
        raise HTTPException(status_code=400, detail=exc.reason)

    logger.info("stripe_webhook_received", event_type=envelope.kind)

    try:
        outcome = await checkout.handle_webhook(envelope)
    except Exception:
        logger.exception("checkout_fulfilment_failed", session_id=envelope.session_id)
        return ok("Event received")

    if outcome == "ignored":
        return ok("Event ignored")
    if outcome == "duplicate":
        return ok("Event already processed")
    return ok("Successful")
