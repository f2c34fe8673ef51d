"""Domain entities for TeamPulse.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from teampulse.domain.entities.refresh_token import RefreshToken
from teampulse.domain.entities.user import User

__all__ = [
    "RefreshToken",
    "User",
]
