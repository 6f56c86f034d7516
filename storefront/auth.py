import asyncio
import logging
from typing import Optional

from .models import SessionUser
from .result import Ok

logger = logging.getLogger(__name__)


class AuthSession:
    """Tracks the signed-in user and tells ``CommerceSync`` about changes."""

    def __init__(self, api, sync=None):
        self.api = api
        self.sync = sync
        self.user: Optional[SessionUser] = None
        self._check_task = None

    @property
    def is_authenticated(self):
        return self.user is not None

    async def _set_user(self, user):
        self.user = user
        if self.sync is not None:
            await self.sync.on_user_changed(user)

    async def check_auth(self):
        """Resolve the current user; concurrent callers share one request."""
        if self._check_task is None:
            self._check_task = asyncio.get_running_loop().create_task(self._check())
        task = self._check_task
        try:
            return await asyncio.shield(task)
        finally:
            if task.done() and self._check_task is task:
                self._check_task = None

    async def _check(self):
        result = await asyncio.to_thread(self.api.me)
        if result.ok:
            await self._set_user(SessionUser.model_validate(result.data))
        else:
            if result.status != 401:
                logger.warning("Auth check failed: %s", result.message)
            await self._set_user(None)
        return self.user

    async def login(self, email, password):
        result = await asyncio.to_thread(self.api.login, email, password)
        if not result.ok:
            logger.info("Login rejected: %s", result.kind)
            return result
        user = SessionUser.model_validate(result.data["user"])
        await self._set_user(user)
        return Ok(user)

    async def logout(self):
        result = await asyncio.to_thread(self.api.logout)
        if not result.ok:
            logger.warning("Backend logout failed: %s", result.message)
        await self._set_user(None)
        return result
