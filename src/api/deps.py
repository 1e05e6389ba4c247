"""FastAPI dependency injection functions."""

from typing import Annotated

from fastapi import Depends

from src.services.profile_store import ProfileStore, get_profile_store

# Type alias for cleaner dependency injection
ProfileStoreDep = Annotated[ProfileStore, Depends(get_profile_store)]
