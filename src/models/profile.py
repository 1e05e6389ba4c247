"""Profile model type definitions for database operations."""

from typing import TypedDict


class ProfileRow(TypedDict):
    """Profile table row representation.

    Profiles are partitioned by username: both ``id`` and
    ``partition_key`` hold the username.
    """

    id: str
    partition_key: str
    first_name: str
    last_name: str
    profile_picture_id: str | None
