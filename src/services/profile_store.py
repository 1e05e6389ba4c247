"""Profile storage backed by a Supabase table and storage bucket."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import uuid4

from storage3.exceptions import StorageApiError

from src.core.config import get_settings
from src.core.supabase import get_supabase_client
from src.models.profile import ProfileRow
from src.schemas.profile import Profile

logger = logging.getLogger(__name__)

# Image MIME types stored as declared by the client
KNOWN_IMAGE_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp"}

# Unregistered spellings clients send for registered types
MIME_TYPE_ALIASES = {"image/jpg": "image/jpeg", "image/pjpeg": "image/jpeg"}

# Leading bytes of the image formats we accept
IMAGE_SIGNATURES: list[tuple[bytes, str]] = [
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
]

# Storage API reports missing objects with either of these
NOT_FOUND_MARKERS = {"404", "not_found", "NoSuchKey"}


class ProfileStoreError(Exception):
    """Base exception for profile store errors."""

    pass


class InvalidProfileError(ProfileStoreError, ValueError):
    """Profile is missing a required field."""

    pass


class InvalidImageError(ProfileStoreError, ValueError):
    """Image id or payload is invalid."""

    pass


@dataclass
class ImageBlob:
    """Downloaded image bytes and the type they should be served as."""

    content: bytes
    content_type: str


class ProfileStore(ABC):
    """Persistence port for profiles and their images."""

    @abstractmethod
    async def upsert_profile(self, profile: Profile) -> None:
        """Create or replace a profile keyed by username."""

    @abstractmethod
    async def get_profile(self, username: str) -> Profile | None:
        """Return the profile, or None if it does not exist."""

    @abstractmethod
    async def delete_profile(self, username: str) -> None:
        """Delete the profile. Missing profiles are ignored."""

    @abstractmethod
    async def upload_image(self, content: bytes, content_type: str | None) -> str:
        """Store image bytes and return the generated image id."""

    @abstractmethod
    async def download_image(self, image_id: str) -> ImageBlob | None:
        """Return the stored image, or None if it does not exist."""


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def detect_image_type(content: bytes) -> str | None:
    """Detect the MIME type of image bytes from their signature.

    Args:
        content: Raw image bytes.

    Returns:
        str | None: The detected MIME type, or None if unrecognized.
    """
    for signature, mime_type in IMAGE_SIGNATURES:
        if content.startswith(signature):
            return mime_type
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    return None


class SupabaseProfileStore(ProfileStore):
    """Profile store using a Supabase table for profiles and a bucket for images."""

    def __init__(self) -> None:
        """Initialize profile store with Supabase client."""
        self.client = get_supabase_client()
        self.settings = get_settings()

    @property
    def _table(self):
        return self.client.table(self.settings.profiles_table)

    @property
    def _bucket(self):
        return self.client.storage.from_(self.settings.images_bucket)

    async def upsert_profile(self, profile: Profile) -> None:
        """Create or replace a profile.

        Args:
            profile: The profile to write.

        Raises:
            InvalidProfileError: If username, first name or last name is blank.
        """
        if (
            profile is None
            or _is_blank(profile.username)
            or _is_blank(profile.first_name)
            or _is_blank(profile.last_name)
        ):
            raise InvalidProfileError(f"Invalid profile {profile!r}")

        self._table.upsert(self._to_row(profile), on_conflict="id").execute()
        logger.info("Upserted profile %s", profile.username)

    async def get_profile(self, username: str) -> Profile | None:
        """Get a profile by username.

        Args:
            username: The profile's username.

        Returns:
            Profile | None: The profile or None if not found.
        """
        response = (
            self._table
            .select("*")
            .eq("partition_key", username)
            .eq("id", username)
            .limit(1)
            .execute()
        )

        if not response.data:
            logger.debug("Profile %s not found", username)
            return None

        return self._to_profile(response.data[0])

    async def delete_profile(self, username: str) -> None:
        """Delete a profile by username.

        Args:
            username: The profile's username.
        """
        (
            self._table
            .delete()
            .eq("partition_key", username)
            .eq("id", username)
            .execute()
        )
        logger.info("Deleted profile %s", username)

    async def upload_image(self, content: bytes, content_type: str | None) -> str:
        """Upload image bytes under a freshly generated id.

        Args:
            content: Raw image bytes.
            content_type: MIME type declared by the client.

        Returns:
            str: The generated image id.

        Raises:
            InvalidImageError: If the payload is empty or too large.
        """
        if not content:
            raise InvalidImageError("Image file is empty")

        max_size = self.settings.max_image_size_bytes
        if len(content) > max_size:
            raise InvalidImageError(
                f"File too large: {len(content) / (1024 * 1024):.1f} MB. "
                f"Maximum size: {max_size / (1024 * 1024):.0f} MB"
            )

        image_id = str(uuid4())
        self._bucket.upload(
            path=image_id,
            file=content,
            file_options={"content-type": self._resolve_content_type(content, content_type)},
        )
        logger.info("Uploaded image %s (%d bytes)", image_id, len(content))

        return image_id

    async def download_image(self, image_id: str) -> ImageBlob | None:
        """Download an image by id.

        Args:
            image_id: The id returned by upload_image.

        Returns:
            ImageBlob | None: The image or None if not found.

        Raises:
            InvalidImageError: If the id is blank.
        """
        if _is_blank(image_id):
            raise InvalidImageError(f"Invalid image id {image_id!r}")

        try:
            content = self._bucket.download(image_id)
        except StorageApiError as e:
            if str(e.status) in NOT_FOUND_MARKERS or str(e.code) in NOT_FOUND_MARKERS:
                logger.debug("Image %s not found", image_id)
                return None
            raise

        content_type = detect_image_type(content) or self.settings.default_image_content_type
        return ImageBlob(content=content, content_type=content_type)

    def _resolve_content_type(self, content: bytes, declared: str | None) -> str:
        """Pick the content type recorded for an uploaded image.

        A declared image type is kept (normalized). Anything else, including
        a missing or generic type, is replaced by the type detected from the
        bytes, or the configured default.
        """
        declared = MIME_TYPE_ALIASES.get(declared, declared)
        if declared in KNOWN_IMAGE_TYPES:
            return declared
        return detect_image_type(content) or self.settings.default_image_content_type

    @staticmethod
    def _to_row(profile: Profile) -> ProfileRow:
        return ProfileRow(
            id=profile.username,
            partition_key=profile.username,
            first_name=profile.first_name,
            last_name=profile.last_name,
            profile_picture_id=profile.profile_picture_id,
        )

    @staticmethod
    def _to_profile(row: ProfileRow) -> Profile:
        # Rows are not re-validated; other writers may hold blank names
        return Profile.model_construct(
            username=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            profile_picture_id=row.get("profile_picture_id"),
        )


def get_profile_store() -> ProfileStore:
    """Get the profile store for the current request."""
    return SupabaseProfileStore()
