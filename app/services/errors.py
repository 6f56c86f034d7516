"""Business-rule errors raised by the service layer.

Each error carries the HTTP status and the stable ``code`` used in the
failure envelope, so routes can let them propagate to ``errors_bp``.
"""


class CommerceError(Exception):
    status = 400
    code = "BAD_REQUEST"
    default_message = "Request could not be processed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotAuthenticated(CommerceError):
    status = 401
    code = "NOT_AUTHENTICATED"
    default_message = "Not authenticated"


class NotAdmin(CommerceError):
    status = 403
    code = "NOT_ADMIN"
    default_message = "Admin access required"


class NotFound(CommerceError):
    status = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class EmptyCart(CommerceError):
    code = "EMPTY_CART"
    default_message = "Cart is empty"


class InsufficientStock(CommerceError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_name):
        self.product_name = product_name
        super().__init__(f"{product_name} is out of stock or insufficient quantity")


class OutOfStock(CommerceError):
    code = "OUT_OF_STOCK"
    default_message = "Product is out of stock"


class AddressNotFound(CommerceError):
    status = 404
    code = "ADDRESS_NOT_FOUND"
    default_message = "Address not found"


class AlreadyInWishlist(CommerceError):
    code = "ALREADY_IN_WISHLIST"
    default_message = "Product already in wishlist"


class DuplicateSlug(CommerceError):
    code = "DUPLICATE_SLUG"
    default_message = "Product with this slug already exists"


class EmailTaken(CommerceError):
    code = "EMAIL_TAKEN"
    default_message = "An account with this email already exists"


__all__ = [
    "CommerceError",
    "NotAuthenticated",
    "NotAdmin",
    "NotFound",
    "EmptyCart",
    "InsufficientStock",
    "OutOfStock",
    "AddressNotFound",
    "AlreadyInWishlist",
    "DuplicateSlug",
    "EmailTaken",
]
