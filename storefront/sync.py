import asyncio
import logging
from typing import Optional

from .models import SessionUser

logger = logging.getLogger(__name__)


class CommerceSync:
    """Runs one cart and wishlist sync per signed-in user.

    Transitions are keyed on the user id, so handing over a fresh but equal
    user object does not trigger a second sync.
    """

    def __init__(self, cart, wishlist):
        self.cart = cart
        self.wishlist = wishlist
        self._last_synced_user_id = None

    @property
    def last_synced_user_id(self):
        return self._last_synced_user_id

    async def on_user_changed(self, user: Optional[SessionUser]):
        if user is None:
            self._last_synced_user_id = None
            for store in (self.cart, self.wishlist):
                store.set_authenticated(False)
            return False

        if user.id == self._last_synced_user_id:
            return False

        self._last_synced_user_id = user.id
        for store in (self.cart, self.wishlist):
            store.bind_user(user.id)
            store.set_authenticated(True)

        logger.info("Syncing cart and wishlist for user %s", user.id)
        results = await asyncio.gather(
            self.cart.sync_from_backend(),
            self.wishlist.sync_from_backend(),
            return_exceptions=True,
        )
        for name, outcome in zip(("cart", "wishlist"), results):
            if isinstance(outcome, Exception):
                logger.error("%s sync failed for user %s: %s", name, user.id, outcome)
        return True
