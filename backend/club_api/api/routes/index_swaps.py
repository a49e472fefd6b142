"""Index swap board routes."""

import structlog
from fastapi import APIRouter
from sqlalchemy import delete, select

from club_api.db.base import get_session_factory
from club_api.db.models.index_swap import IndexSwap
from club_api.schemas.common import ApiResponse, fail, ok
from club_api.schemas.index_swaps import IndexSwapCreate, IndexSwapResponse, IndexSwapUpdate

logger = structlog.get_logger(__name__)

router = APIRouter()

DUPLICATE_REQUEST = "Index Swap request already exists"
NOT_FOUND = "No such index swap request exists"

NATURAL_KEY = ("student_name", "module_name", "module_code", "have_index", "want_index")


async def _find_duplicate(session, key: dict[str, str], exclude_id: str | None = None) -> IndexSwap | None:
    query = select(IndexSwap).where(*(getattr(IndexSwap, field) == value for field, value in key.items()))
    if exclude_id is not None:
        query = query.where(IndexSwap.id != exclude_id)
    result = await session.execute(query.limit(1))
    return result.scalar_one_or_none()


@router.post("", response_model=ApiResponse[IndexSwapResponse])
async def create_index_swap(body: IndexSwapCreate):
    factory = get_session_factory()
    async with factory() as session:
        if await _find_duplicate(session, body.natural_key()):
            return fail(DUPLICATE_REQUEST)

        swap = IndexSwap(**body.model_dump())
        session.add(swap)
        await session.commit()
        await session.refresh(swap)

    logger.info("index_swap_created", index_swap_id=swap.id, module_code=swap.module_code)
    return ok("Index Swap Request created successfully", IndexSwapResponse.model_validate(swap))


@router.get("", response_model=ApiResponse[list[IndexSwapResponse]])
async def list_index_swaps():
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(select(IndexSwap).order_by(IndexSwap.module_code, IndexSwap.student_name))
        swaps = result.scalars().all()

    if not swaps:
        return fail("No index swap requests found")
    return ok("Index swap requests found", [IndexSwapResponse.model_validate(s) for s in swaps])


@router.put("/{swap_id}", response_model=ApiResponse[IndexSwapResponse])
async def update_index_swap(swap_id: str, body: IndexSwapUpdate):
    """Partial update; rejected if the resulting natural key belongs to another request."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    factory = get_session_factory()
    async with factory() as session:
        swap = await session.get(IndexSwap, swap_id)
        if swap is None:
            return fail(NOT_FOUND)

        key = {field: changes.get(field, getattr(swap, field)) for field in NATURAL_KEY}
        if await _find_duplicate(session, key, exclude_id=swap.id):
            return fail(DUPLICATE_REQUEST)

        for field, value in changes.items():
            setattr(swap, field, value)
        await session.commit()
        await session.refresh(swap)

    return ok("Index Swap Request updated successfully", IndexSwapResponse.model_validate(swap))


@router.delete("/{swap_id}", response_model=ApiResponse[None])
async def delete_index_swap(swap_id: str):
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(delete(IndexSwap).where(IndexSwap.id == swap_id))
        await session.commit()

    if result.rowcount == 0:
        return fail(NOT_FOUND)

    logger.info("index_swap_deleted", index_swap_id=swap_id)
    return ok("Index swap request deleted successfully")
