from abc import ABC, abstractmethod
from typing import Optional


class IGeoLookup(ABC):
    """Resolves a client IP address to a human-readable location"""

    @abstractmethod
    async def resolve(self, ip: Optional[str]) -> Optional[str]:
        """Return "City, Country" or None. Never raises."""
        pass
