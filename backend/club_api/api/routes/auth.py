"""Member sign-up and login routes."""

import asyncio
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from club_api.api.deps import get_app_settings, get_notifier
from club_api.core.auth import (
    MemberToken,
    create_access_token,
    generate_otp,
    hash_password,
    require_auth,
    verify_password,
)
from club_api.core.config import Settings
from club_api.db.base import get_session_factory
from club_api.db.models.otp import Otp
from club_api.db.models.user import User
from club_api.domain.emails import OTP_SUBJECT, render_otp_email
from club_api.schemas.auth import (
    LoginRequest,
    OtpRequest,
    OtpVerifyRequest,
    ProfileResponse,
    RegisterRequest,
    TokenData,
)
from club_api.schemas.common import ApiResponse, fail, ok
from club_api.services.notifier import Notifier

logger = structlog.get_logger(__name__)

router = APIRouter()

EMAIL_TAKEN = "Email already registered and exists"
BAD_CREDENTIALS = "Invalid Email or Password"


async def store_otp(email: str, code: str) -> None:
    """Insert or replace the pending code for an address.

    Insert first; a unique-email conflict (an earlier code, or a concurrent
    request for the same address) falls back to overwriting that row.
    """
    factory = get_session_factory()
    async with factory() as session:
        try:
            session.add(Otp(email=email, code=code))
            await session.commit()
            return
        except IntegrityError:
            await session.rollback()

        await session.execute(
            update(Otp)
            .where(Otp.email == email)
            .values(code=code, created_at=datetime.now(timezone.utc))
        )
        await session.commit()


async def _email_registered(session, email: str) -> bool:
    result = await session.execute(select(User.id).where(User.email == email).limit(1))
    return result.scalar_one_or_none() is not None


@router.post("/createOtp", response_model=ApiResponse[None])
async def create_otp(
    body: OtpRequest,
    settings: Settings = Depends(get_app_settings),
    notifier: Notifier = Depends(get_notifier),
):
    """Store a fresh sign-up code for the address and e-mail it.

    Delivery is best-effort: the response does not reveal a failed send.
    """
    code = generate_otp(settings.otp_length)

    factory = get_session_factory()
    async with factory() as session:
        if await _email_registered(session, body.email):
            return fail(EMAIL_TAKEN)

    await store_otp(body.email, code)
    await notifier.send(OTP_SUBJECT, render_otp_email(code), body.email)
    logger.info("otp_issued")
    return ok("OTP has been sent to your email")


@router.post("/verifyOtp", response_model=ApiResponse[None])
async def verify_otp(body: OtpVerifyRequest):
    """Consume the code: it verifies at most once."""
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(
            delete(Otp).where(Otp.email == body.email, Otp.code == body.otp)
        )
        await session.commit()

    if result.rowcount == 0:
        return fail("Invalid Otp")
    return ok("Otp verified")


@router.post("/register", response_model=ApiResponse[TokenData])
async def register(body: RegisterRequest, settings: Settings = Depends(get_app_settings)):
    factory = get_session_factory()
    async with factory() as session:
        if await _email_registered(session, body.email):
            return fail(EMAIL_TAKEN)

        user = User(
            email=body.email,
            password_hash=await asyncio.to_thread(hash_password, body.password, settings.bcrypt_rounds),
            name=body.name,
            phone_number=body.phone_number,
        )
        session.add(user)
        await session.commit()

    logger.info("user_registered", user_id=user.id)
    token = create_access_token(settings, user.email, user.name, user.phone_number)
    return ok("User registered successfully", TokenData(token=token))


@router.post("/login", response_model=ApiResponse[TokenData])
async def login(body: LoginRequest, settings: Settings = Depends(get_app_settings)):
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(select(User).where(User.email == body.email))
        user = result.scalar_one_or_none()

    if user is None or not await asyncio.to_thread(verify_password, body.password, user.password_hash):
        return fail(BAD_CREDENTIALS)

    token = create_access_token(settings, user.email, user.name, user.phone_number)
    return ok("User login successfully", TokenData(token=token))


@router.get("/me", response_model=ApiResponse[ProfileResponse])
async def me(member: MemberToken = Depends(require_auth)):
    """Profile claims of the presented access token."""
    return ok(
        "Token valid",
        ProfileResponse(email=member.email, name=member.name, phone_number=member.phone_number),
    )
