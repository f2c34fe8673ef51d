"""Authentication use cases."""

from teampulse.application.use_cases.login import LoginResult, LoginUseCase
from teampulse.application.use_cases.logout import LogoutUseCase
from teampulse.application.use_cases.purge_expired_tokens import PurgeExpiredRefreshTokensUseCase
from teampulse.application.use_cases.refresh_session import RefreshSessionUseCase, TokenPair

__all__ = [
    "LoginResult",
    "LoginUseCase",
    "LogoutUseCase",
    "PurgeExpiredRefreshTokensUseCase",
    "RefreshSessionUseCase",
    "TokenPair",
]
