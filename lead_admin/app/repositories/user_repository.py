from abc import ABC, abstractmethod
from typing import List, Optional

from lead_admin.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact, case-sensitive username"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_username_or_email(
        self, username: str, email: str
    ) -> Optional[User]:
        """Get the first user holding either the username or the email"""
        pass

    @abstractmethod
    async def list(self) -> List[User]:
        """List all users, newest first"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def delete(self, user: User) -> None:
        """Delete a user"""
        pass
