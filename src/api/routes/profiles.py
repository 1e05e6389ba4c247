"""Profile API routes."""

from urllib.parse import quote

from fastapi import APIRouter, Response, status

from src.api.deps import ProfileStoreDep
from src.api.middleware.error_handler import ConflictError, NotFoundError, ValidationError
from src.schemas.profile import Profile, ProfileResponse
from src.services.profile_store import InvalidProfileError

router = APIRouter(prefix="/profile", tags=["profiles"])


@router.get(
    "/{username}",
    response_model=ProfileResponse,
    summary="Get a profile",
    responses={
        200: {"description": "Profile found"},
        404: {"description": "Profile not found"},
    },
)
async def get_profile(username: str, store: ProfileStoreDep) -> Profile:
    """Get a profile by username.

    Raises:
        NotFoundError: 404 if no profile exists for the username.
    """
    profile = await store.get_profile(username)
    if profile is None:
        raise NotFoundError(f"A User with username {username} was not found")

    return profile


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile",
    responses={
        201: {"description": "Profile created"},
        409: {"description": "A profile with this username already exists"},
        422: {"description": "Username, first name or last name is blank"},
    },
)
async def add_profile(profile: Profile, response: Response, store: ProfileStoreDep) -> Profile:
    """Create a new profile.

    The existence check and the write are separate calls, so two concurrent
    creates for the same username can both pass the check; the last write wins.

    Raises:
        ConflictError: 409 if the username is taken.
        ValidationError: 422 if the profile is rejected by the store.
    """
    existing = await store.get_profile(profile.username)
    if existing is not None:
        raise ConflictError(f"A user with username {profile.username} already exists")

    location = f"{router.prefix}/{quote(profile.username, safe='')}"

    try:
        await store.upsert_profile(profile)
    except InvalidProfileError as e:
        raise ValidationError(str(e)) from e

    response.headers["Location"] = location
    return profile


@router.put(
    "/{username}",
    response_model=ProfileResponse,
    summary="Create or replace a profile",
    responses={
        200: {"description": "Profile written"},
        422: {"description": "Invalid profile or username mismatch"},
    },
)
async def upsert_profile(username: str, profile: Profile, store: ProfileStoreDep) -> Profile:
    """Create or replace the profile at username (last write wins).

    Raises:
        ValidationError: 422 if the body username differs from the path
            or the profile is rejected by the store.
    """
    if profile.username != username:
        raise ValidationError(
            f"Username in body ({profile.username}) does not match path ({username})"
        )

    try:
        await store.upsert_profile(profile)
    except InvalidProfileError as e:
        raise ValidationError(str(e)) from e

    return profile


@router.delete(
    "/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a profile",
)
async def delete_profile(username: str, store: ProfileStoreDep) -> Response:
    """Delete a profile. Deleting a missing profile succeeds."""
    await store.delete_profile(username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
