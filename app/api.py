from app.routes import (
    auth_bp,
    catalog_bp,
    account_bp,
    admin_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(account_bp)
    app.register_blueprint(admin_bp)
