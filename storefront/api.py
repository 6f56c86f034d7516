import logging
import requests
from requests import RequestException

from .result import Err, Result, from_envelope

logger = logging.getLogger(__name__)


class StorefrontApi:
    """Blocking JSON client for the storefront API.

    Every call returns ``Ok(data)`` or ``Err(kind, message, status)``; network
    failures come back as ``Err("NETWORK_ERROR", ...)`` instead of raising.
    """

    def __init__(self, base_url: str, session: requests.Session = None, timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.token = None

    def _request(self, method, path, **kwargs) -> Result:
        url = f"{self.base_url}{path}"
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        logger.debug("StorefrontApi %s %s", method, url)
        try:
            resp = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except RequestException as e:
            logger.warning("StorefrontApi %s %s failed: %s", method, url, e)
            return Err("NETWORK_ERROR", str(e))
        try:
            body = resp.json()
        except ValueError:
            return Err("BAD_RESPONSE", f"Unexpected response ({resp.status_code})", resp.status_code)
        return from_envelope(resp.status_code, body)

    # --- auth ---

    def login(self, email, password) -> Result:
        result = self._request("POST", "/auth/login", json={"email": email, "password": password})
        if result.ok:
            self.token = result.data["access"]
        return result

    def logout(self) -> Result:
        result = self._request("POST", "/auth/logout")
        self.token = None
        return result

    def me(self) -> Result:
        if not self.token:
            return Err("NOT_AUTHENTICATED", "Not authenticated", 401)
        return self._request("GET", "/auth/me")

    # --- cart ---

    def get_cart(self) -> Result:
        return self._request("GET", "/cart")

    def add_to_cart(self, product_id, quantity=1) -> Result:
        return self._request("POST", "/cart", json={"product_id": product_id, "quantity": quantity})

    def update_cart_item(self, cart_item_id, quantity) -> Result:
        return self._request("PUT", f"/cart/{cart_item_id}", json={"quantity": quantity})

    def remove_cart_item(self, cart_item_id) -> Result:
        return self._request("DELETE", f"/cart/{cart_item_id}")

    def clear_cart(self) -> Result:
        return self._request("DELETE", "/cart")

    # --- orders ---

    def place_order(self, address_id, payment_method, payment_id=None, notes=None) -> Result:
        payload = {"address_id": address_id, "payment_method": payment_method}
        if payment_id is not None:
            payload["payment_id"] = payment_id
        if notes is not None:
            payload["notes"] = notes
        return self._request("POST", "/orders", json=payload)

    # --- wishlist ---

    def get_wishlist(self) -> Result:
        return self._request("GET", "/wishlist")

    def add_to_wishlist(self, product_id) -> Result:
        return self._request("POST", "/wishlist", json={"product_id": product_id})

    def remove_wishlist_item(self, wishlist_item_id) -> Result:
        return self._request("DELETE", f"/wishlist/{wishlist_item_id}")

    def remove_from_wishlist(self, product_id) -> Result:
        return self._request("DELETE", "/wishlist", params={"product_id": product_id})
