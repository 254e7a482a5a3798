"""Identity business logic layer."""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.core.database import get_db_session
from juvo.core.security import access_token_subject, bearer_scheme
from juvo.modules.identity.actors import Actor, actor_from_user
from juvo.modules.identity.models import User
from juvo.modules.identity.repository import IdentityRepository
from juvo.shared.exceptions import ForbiddenException


class IdentityService:
    """Maps a verified bearer token onto a local user row."""

    def __init__(self, repository: IdentityRepository) -> None:
        self.repository = repository

    async def get_user_from_access_token(self, token: str) -> User:
        user_id = access_token_subject(token)
        user = await self.repository.get_user_by_id(user_id)
        if user is None:
            raise ForbiddenException("User not found", code="user_not_found")
        if not user.is_active:
            raise ForbiddenException("User is inactive", code="user_inactive")
        return user


async def get_identity_service(session: AsyncSession = Depends(get_db_session)) -> IdentityService:
    return IdentityService(IdentityRepository(session))


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    service: IdentityService = Depends(get_identity_service),
) -> Actor:
    """Resolve the authenticated caller as a member or worker actor."""
    user = await service.get_user_from_access_token(credentials.credentials)
    return actor_from_user(user)
