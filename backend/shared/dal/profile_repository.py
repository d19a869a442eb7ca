"""Abstract interface for profile persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from shared.dal.models import Profile


class ProfileRepository(ABC):
    """Abstract interface for profile persistence.

    Implementations can use SQLite, PostgreSQL, etc.
    """

    @abstractmethod
    async def create_profile(self, profile: Profile) -> None: ...

    @abstractmethod
    async def get_profile(self, profile_id: str) -> Profile | None: ...

    @abstractmethod
    async def list_profiles(self) -> list[Profile]: ...

    @abstractmethod
    async def touch_profile(self, profile_id: str, used_at: datetime) -> bool: ...

    @abstractmethod
    async def delete_profile(self, profile_id: str) -> bool: ...
