from flask import Blueprint, request
from models import db
from models.order import Order
from models.product import Product
from models.user import User
from app.version import API_PREFIX
from app.schemas.catalog import ProductCreateRequest, ProductUpdateRequest
from app.services.errors import DuplicateSlug, NotFound
from app.utils import ok, auth_required, role_required, transactional, validate_schema

admin_bp = Blueprint("admin", __name__, url_prefix=f"{API_PREFIX}/admin")


@admin_bp.before_request
@auth_required
@role_required("admin")
def _enforce_admin_role():
    """Ensure the requester is an authenticated admin."""
    return None


def _get_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        raise NotFound("Product not found")
    return product


@admin_bp.route("/products", methods=["POST"])
@validate_schema(ProductCreateRequest)
def create_product():
    fields = request.validated_data.model_dump(mode="json")
    if Product.query.filter_by(slug=fields["slug"]).first():
        raise DuplicateSlug()
    product = Product(**fields)
    with transactional("Failed to create product"):
        db.session.add(product)
    return ok(product.to_dict(), message="Product created successfully", status=201)


@admin_bp.route("/products/<int:product_id>", methods=["PUT"])
@validate_schema(ProductUpdateRequest)
def update_product(product_id):
    product = _get_product(product_id)
    changes = request.validated_data.model_dump(mode="json", exclude_unset=True)
    slug = changes.get("slug")
    if slug and slug != product.slug and Product.query.filter_by(slug=slug).first():
        raise DuplicateSlug()
    with transactional("Failed to update product"):
        for key, value in changes.items():
            setattr(product, key, value)
    return ok(product.to_dict(), message="Product updated successfully")


@admin_bp.route("/products/<int:product_id>", methods=["DELETE"])
def delete_product(product_id):
    product = _get_product(product_id)
    with transactional("Failed to delete product"):
        db.session.delete(product)
    return ok(message="Product deleted successfully")


@admin_bp.route("/users", methods=["GET"])
def list_users():
    users = User.query.order_by(User.id.desc()).limit(50).all()
    return ok([u.to_dict() for u in users])


@admin_bp.route("/orders", methods=["GET"])
def list_orders():
    orders = Order.query.order_by(Order.id.desc()).limit(50).all()
    return ok([
        {"id": o.id, "user_id": o.user_id, "status": o.status, "total": float(o.total)}
        for o in orders
    ])
