"""Profile Pydantic schemas for API request/response models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProfileBase(BaseModel):
    """Profile fields, serialized with camelCase keys (``firstName``, ``profilePictureId``)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    username: str = Field(max_length=255, description="Unique username, also the partition key")
    first_name: str = Field(max_length=255, description="User first name")
    last_name: str = Field(max_length=255, description="User last name")
    profile_picture_id: str | None = Field(
        default=None,
        description="Image id returned by the image upload endpoint",
    )


class Profile(ProfileBase):
    """A user profile as written by clients.

    Username, first name and last name must not be blank.
    """

    @field_validator("username", "first_name", "last_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ProfileResponse(ProfileBase):
    """Schema for profile API responses.

    Stored profiles are returned as-is, without the write-side checks.
    """
