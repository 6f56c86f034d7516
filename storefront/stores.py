"""Local-first cart and wishlist stores.

Each store owns a product-id keyed map that is persisted to a key-value
storage on every change. Mutations apply locally first; when the store is
authenticated the matching backend call runs as a background task and the
affected line is restored if that call fails.
"""
import asyncio
import logging
from typing import Callable, Dict, Optional

from pydantic import ValidationError

from .errors import InsufficientStock, OutOfStock
from .models import CartLine, Product, WishlistEntry
from .result import Err, Result
from .storage import MemoryStorage

logger = logging.getLogger(__name__)


class _LocalFirstStore:
    storage_key = None
    line_model = None
    backend_id_field = None

    def __init__(self, api, storage=None, on_warning: Optional[Callable[[str], None]] = None):
        self.api = api
        self.storage = storage if storage is not None else MemoryStorage()
        self.on_warning = on_warning
        self.authenticated = False
        self._items: Dict[int, object] = {}
        # user whose backend rows the stored ids point at
        self._owner_id = None
        self._syncing = False
        self._generation = 0
        self._closed = False
        self._tasks = set()
        self._load()

    # --- persistence ---

    def _load(self):
        raw = self.storage.get(self.storage_key) or {}
        self._owner_id = raw.get("owner")
        for entry in raw.get("items", []):
            try:
                line = self.line_model.model_validate(entry)
            except ValidationError as e:
                logger.warning("Dropping unreadable %s entry: %s", self.storage_key, e)
                continue
            self._items[line.id] = line

    def _persist(self):
        self.storage.set(
            self.storage_key,
            {
                "owner": self._owner_id,
                "items": [line.model_dump(mode="json") for line in self._items.values()],
            },
        )

    # --- state ---

    @property
    def items(self):
        return list(self._items.values())

    @property
    def owner_id(self):
        return self._owner_id

    @property
    def is_syncing(self):
        return self._syncing

    def get(self, product_id):
        return self._items.get(product_id)

    def _put(self, line):
        self._items[line.id] = line
        self._persist()

    def _drop(self, product_id):
        line = self._items.pop(product_id, None)
        if line is not None:
            self._persist()
        return line

    def _backend_id(self, line):
        return getattr(line, self.backend_id_field)

    def _forget_backend_ids(self):
        for pid, line in list(self._items.items()):
            self._items[pid] = line.model_copy(update={self.backend_id_field: None})
        self._persist()

    def set_authenticated(self, flag: bool):
        if self.authenticated and not flag:
            # In-flight results belong to the previous session
            self._generation += 1
        self.authenticated = flag

    def bind_user(self, user_id):
        """Attach the stored backend ids to ``user_id``.

        Ids recorded for another account are dropped so their lines count
        as local-only again.
        """
        if self._owner_id is not None and self._owner_id != user_id:
            self.reset_session()
        self._owner_id = user_id
        self._persist()

    def reset_session(self):
        """Forget everything tied to the previous account, keep local lines."""
        self._generation += 1
        self._forget_backend_ids()

    def close(self):
        self._closed = True
        self._generation += 1

    def _is_current(self, generation):
        return not self._closed and generation == self._generation

    # --- background work ---

    def _spawn(self, coro):
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self):
        """Wait for every outstanding backend call (tests, shutdown)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _call(self, fn, *args):
        return await asyncio.to_thread(fn, *args)

    def _warn(self, message):
        logger.warning("%s: %s", self.storage_key, message)
        if self.on_warning:
            self.on_warning(message)

    # --- sync ---

    def _fetch(self):
        raise NotImplementedError

    def _parse_remote(self, data):
        raise NotImplementedError

    def _push(self, line):
        raise NotImplementedError

    async def sync_from_backend(self) -> bool:
        """Merge backend state into the local map.

        Returns False when a sync for this store is already running.
        """
        if self._syncing:
            logger.debug("%s sync already in flight, ignoring trigger", self.storage_key)
            return False
        self._syncing = True
        generation = self._generation
        try:
            result = await self._call(self._fetch)
            if not self._is_current(generation):
                return False
            if not result.ok:
                self._warn(f"Could not load saved items: {result.message}")
                return False

            remote = self._parse_remote(result.data)
            merged = {}
            local_only = []
            for pid, line in self._items.items():
                if pid in remote:
                    continue
                if self._backend_id(line) is not None:
                    # synced earlier, since deleted on the server (ordered, or removed elsewhere)
                    continue
                merged[pid] = line
                local_only.append(line)
            merged.update(remote)
            self._items = merged
            self._persist()

            for line in local_only:
                self._spawn(self._push_local_only(line, generation))
            return True
        finally:
            self._syncing = False

    async def _push_local_only(self, line, generation):
        result = await self._call(self._push, line)
        if not self._is_current(generation):
            return
        if not result.ok:
            logger.warning("Failed to push %s item %s: %s", self.storage_key, line.id, result.message)
            return
        self._record_backend_id(line.id, result.data)

    def _record_backend_id(self, product_id, data):
        current = self._items.get(product_id)
        if current is None or not isinstance(data, dict) or data.get("id") is None:
            return
        self._put(current.model_copy(update={self.backend_id_field: data["id"]}))


class CartStore(_LocalFirstStore):
    storage_key = "cart-storage"
    line_model = CartLine
    backend_id_field = "cart_item_id"

    def total(self):
        return sum(line.price * line.quantity for line in self._items.values())

    def item_count(self):
        return sum(line.quantity for line in self._items.values())

    def _fetch(self):
        return self.api.get_cart()

    def _parse_remote(self, data):
        remote = {}
        for row in (data or {}).get("items", []):
            product = row.get("product")
            if not product:
                continue
            line = CartLine.model_validate(dict(product, quantity=row["quantity"], cart_item_id=row["id"]))
            remote[line.id] = line
        return remote

    def _push(self, line):
        return self.api.add_to_cart(line.id, line.quantity)

    @staticmethod
    def _check_stock(product, wanted):
        if not product.in_stock or product.stock_quantity == 0:
            raise OutOfStock(product.name)
        if product.stock_quantity is not None and wanted > product.stock_quantity:
            raise InsufficientStock(product.name, product.stock_quantity)

    def add_item(self, product: Product, quantity: int = 1):
        """Add ``quantity`` of ``product``; returns the backend task or None."""
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        previous = self._items.get(product.id)
        existing = previous.quantity if previous else 0
        self._check_stock(product, existing + quantity)

        fields = product.model_dump(include=set(Product.model_fields))
        line = CartLine(
            **fields,
            quantity=existing + quantity,
            cart_item_id=previous.cart_item_id if previous else None,
        )
        self._put(line)
        if not self.authenticated:
            return None
        return self._spawn(self._send_add(product.id, quantity, previous, self._generation))

    async def _send_add(self, product_id, quantity, previous, generation):
        result = await self._call(self.api.add_to_cart, product_id, quantity)
        if not self._is_current(generation):
            return
        if result.ok:
            self._record_backend_id(product_id, result.data)
            return
        if previous is None:
            self._drop(product_id)
        else:
            self._put(previous)
        self._warn(f"Could not add item to cart: {result.message}")

    def remove_item(self, product_id):
        removed = self._drop(product_id)
        if removed is None or not self.authenticated or removed.cart_item_id is None:
            return None
        return self._spawn(self._send_remove(removed, self._generation))

    async def _send_remove(self, removed, generation):
        result = await self._call(self.api.remove_cart_item, removed.cart_item_id)
        if not self._is_current(generation):
            return
        if result.ok or result.status == 404:
            return
        if removed.id not in self._items:
            self._put(removed)
        self._warn(f"Could not remove item from cart: {result.message}")

    def update_quantity(self, product_id, quantity: int):
        if quantity <= 0:
            return self.remove_item(product_id)
        previous = self._items.get(product_id)
        if previous is None:
            return None
        if previous.stock_quantity is not None and quantity > previous.stock_quantity:
            raise InsufficientStock(previous.name, previous.stock_quantity)

        self._put(previous.model_copy(update={"quantity": quantity}))
        if not self.authenticated or previous.cart_item_id is None:
            return None
        return self._spawn(self._send_update(previous, quantity, self._generation))

    async def _send_update(self, previous, quantity, generation):
        result = await self._call(self.api.update_cart_item, previous.cart_item_id, quantity)
        if not self._is_current(generation):
            return
        if result.ok:
            return
        current = self._items.get(previous.id)
        if current is not None:
            self._put(current.model_copy(update={"quantity": previous.quantity}))
        self._warn(f"Could not update quantity: {result.message}")

    def clear(self):
        self._items = {}
        self._persist()
        if not self.authenticated:
            return None
        return self._spawn(self._send_clear())

    async def _send_clear(self):
        result = await self._call(self.api.clear_cart)
        if not result.ok:
            logger.warning("Failed to clear backend cart: %s", result.message)

    async def checkout(self, address_id, payment_method, payment_id=None, notes=None) -> Result:
        """Place an order for the backend cart and empty the local one on success.

        Pending cart calls are awaited first so the server prices what the
        shopper sees.
        """
        if not self.authenticated:
            return Err("NOT_AUTHENTICATED", "Sign in to place an order", 401)
        await self.drain()
        generation = self._generation
        result = await self._call(self.api.place_order, address_id, payment_method, payment_id, notes)
        if not result.ok:
            self._warn(f"Could not place order: {result.message}")
            return result
        # the server emptied its cart inside the order transaction
        if self._is_current(generation):
            self._items = {}
            self._persist()
        logger.info("Order %s placed", (result.data or {}).get("id"))
        return result


class WishlistStore(_LocalFirstStore):
    storage_key = "wishlist-storage"
    line_model = WishlistEntry
    backend_id_field = "wishlist_item_id"

    def contains(self, product_id):
        return product_id in self._items

    def _fetch(self):
        return self.api.get_wishlist()

    def _parse_remote(self, data):
        remote = {}
        for row in data or []:
            product = row.get("product")
            if not product:
                continue
            entry = WishlistEntry.model_validate(dict(product, wishlist_item_id=row["id"]))
            remote[entry.id] = entry
        return remote

    def _push(self, line):
        return self.api.add_to_wishlist(line.id)

    def add_item(self, product: Product):
        if product.id in self._items:
            return None
        self._put(WishlistEntry(**product.model_dump(include=set(Product.model_fields))))
        if not self.authenticated:
            return None
        return self._spawn(self._send_add(product.id, self._generation))

    async def _send_add(self, product_id, generation):
        result = await self._call(self.api.add_to_wishlist, product_id)
        if not self._is_current(generation):
            return
        if result.ok:
            self._record_backend_id(product_id, result.data)
            return
        if result.kind == "ALREADY_IN_WISHLIST":
            return
        self._drop(product_id)
        self._warn(f"Could not add item to wishlist: {result.message}")

    def remove_item(self, product_id):
        removed = self._drop(product_id)
        if removed is None or not self.authenticated:
            return None
        return self._spawn(self._send_remove(removed, self._generation))

    async def _send_remove(self, removed, generation):
        if removed.wishlist_item_id is not None:
            result = await self._call(self.api.remove_wishlist_item, removed.wishlist_item_id)
        else:
            result = await self._call(self.api.remove_from_wishlist, removed.id)
        if not self._is_current(generation):
            return
        if result.ok or result.status == 404:
            return
        if removed.id not in self._items:
            self._put(removed)
        self._warn(f"Could not remove item from wishlist: {result.message}")
