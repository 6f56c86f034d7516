from models import db, BIGINT
from datetime import datetime


class CartItem(db.Model):
    __tablename__ = "cart_item"
    __table_args__ = (
        db.UniqueConstraint("user_id", "product_id", name="uq_cart_item_user_product"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("user.id"), nullable=False, index=True)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id", ondelete="CASCADE"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    product = db.relationship("Product")

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "product": self.product.summary() if self.product else None,
        }


class WishlistItem(db.Model):
    __tablename__ = "wishlist_item"
    __table_args__ = (
        db.UniqueConstraint("user_id", "product_id", name="uq_wishlist_item_user_product"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("user.id"), nullable=False, index=True)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    product = db.relationship("Product")

    def to_dict(self):
        data = {
            "id": self.id,
            "product_id": self.product_id,
            "product": None,
        }
        if self.product:
            data["product"] = dict(self.product.summary(), description=self.product.description)
        return data
