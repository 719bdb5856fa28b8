"""User profile endpoints."""

from fastapi import APIRouter

from kz_tax_engine.api.dependencies import DbSession, Profiles, UserId
from kz_tax_engine.api.schemas import ErrorResponse, ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=ProfileResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_profile(profiles: Profiles, user_id: UserId) -> ProfileResponse:
    """Stored profile merged over defaults."""
    profile = await profiles.get(user_id)
    return ProfileResponse.model_validate(profile)


@router.patch(
    "",
    response_model=ProfileResponse,
    responses={400: {"model": ErrorResponse}},
)
async def update_profile(
    db: DbSession,
    profiles: Profiles,
    user_id: UserId,
    payload: ProfileUpdate,
) -> ProfileResponse:
    """Upsert the fields present in the payload."""
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    profile = await profiles.update(user_id, changes)
    await db.commit()
    return ProfileResponse.model_validate(profile)
