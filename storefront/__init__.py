"""Local-first cart and wishlist state for storefront clients.

Stores keep working while signed out and reconcile with the account's
backend copy once a user signs in.
"""
from .api import StorefrontApi
from .auth import AuthSession
from .errors import StoreError, OutOfStock, InsufficientStock
from .models import Product, CartLine, WishlistEntry, SessionUser
from .result import Ok, Err
from .storage import MemoryStorage, JsonFileStorage
from .stores import CartStore, WishlistStore
from .sync import CommerceSync

__all__ = [
    "StorefrontApi",
    "AuthSession",
    "StoreError",
    "OutOfStock",
    "InsufficientStock",
    "Product",
    "CartLine",
    "WishlistEntry",
    "SessionUser",
    "Ok",
    "Err",
    "MemoryStorage",
    "JsonFileStorage",
    "CartStore",
    "WishlistStore",
    "CommerceSync",
]
