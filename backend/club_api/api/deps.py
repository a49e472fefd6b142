"""FastAPI dependencies for application-scoped collaborators.

create_app() stores Settings and the gateway/notifier/storage objects on
app.state; handlers receive them through these functions so tests can swap
them with dependency_overrides or by passing fakes to create_app().
"""

from fastapi import Depends, Request

from club_api.core.config import Settings, get_settings
from club_api.services.checkout_service import CheckoutService
from club_api.services.notifier import Notifier
from club_api.services.object_storage import ObjectStorage
from club_api.services.payment_gateway import PaymentGateway


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage


def get_checkout_service(
    settings: Settings = Depends(get_app_settings),
    gateway: PaymentGateway = Depends(get_gateway),
    notifier: Notifier = Depends(get_notifier),
) -> CheckoutService:
    return CheckoutService(
        gateway=gateway,
        notifier=notifier,
        success_url=settings.checkout_success_url,
        cancel_url=settings.checkout_cancel_url,
        dedupe_enabled=settings.webhook_dedupe_enabled,
    )
