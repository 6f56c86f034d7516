from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from models import db, BIGINT

ORDER_STATUSES = ("PENDING", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELLED")


class Order(db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_user_created", "user_id", "created_at"),
    )
    id = Column(BIGINT, primary_key=True)
    user_id = Column(BIGINT, ForeignKey("user.id"), nullable=False)
    # Reference kept for lookups; the ship_* columns below are what gets displayed
    address_id = Column(BIGINT, ForeignKey("address.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(20), nullable=False, default="PENDING")
    payment_method = Column(String(50), nullable=False)
    payment_id = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    subtotal = Column(db.Numeric(12, 2), nullable=False)
    shipping = Column(db.Numeric(12, 2), nullable=False)
    tax = Column(db.Numeric(12, 2), nullable=False)
    total = Column(db.Numeric(12, 2), nullable=False)

    # Address snapshot taken at order time
    ship_full_name = Column(String(100), nullable=False)
    ship_phone = Column(String(20), nullable=False)
    ship_address_line1 = Column(String(255), nullable=False)
    ship_address_line2 = Column(String(255), nullable=True)
    ship_city = Column(String(100), nullable=False)
    ship_state = Column(String(100), nullable=False)
    ship_postal_code = Column(String(20), nullable=False)
    ship_country = Column(String(100), nullable=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan", lazy=True)

    def shipping_address(self):
        return {
            "address_id": self.address_id,
            "full_name": self.ship_full_name,
            "phone": self.ship_phone,
            "address_line1": self.ship_address_line1,
            "address_line2": self.ship_address_line2,
            "city": self.ship_city,
            "state": self.ship_state,
            "postal_code": self.ship_postal_code,
            "country": self.ship_country,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "status": self.status,
            "payment_method": self.payment_method,
            "payment_id": self.payment_id,
            "notes": self.notes,
            "subtotal": float(self.subtotal),
            "shipping": float(self.shipping),
            "tax": float(self.tax),
            "total": float(self.total),
            "address": self.shipping_address(),
            "items": [i.to_dict() for i in self.items],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class OrderItem(db.Model):
    __tablename__ = "order_item"
    id = db.Column(BIGINT, primary_key=True)
    order_id = db.Column(BIGINT, db.ForeignKey("order.id"), nullable=False)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id", ondelete="SET NULL"), nullable=True)
    product_name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Integer, nullable=False)  # unit price captured at order time

    product = db.relationship("Product")

    def to_dict(self):
        return {
            "product_id": self.product_id,
            "name": self.product_name,
            "image": self.product.image if self.product else None,
            "quantity": self.quantity,
            "price": self.price,
            "subtotal": self.price * self.quantity,
        }
