from .auth import auth_bp
from .catalog import catalog_bp
from .account import account_bp
from .admin import admin_bp


__all__ = [
    'auth_bp',
    'catalog_bp',
    'account_bp',
    'admin_bp',
]
