# --- models/product.py ---
from models import db, BIGINT
from datetime import datetime


class Product(db.Model):
    __tablename__ = "product"
    __table_args__ = (
        db.Index("ix_product_category_price", "category", "price"),
    )

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)

    # Pricing, minor currency unit
    price = db.Column(db.Integer, nullable=False)
    original_price = db.Column(db.Integer, nullable=True)         # Display only, never used in totals

    image = db.Column(db.String(500), nullable=False)
    images = db.Column(db.JSON, default=list)
    category = db.Column(db.String(50), nullable=False)

    # Inventory
    in_stock = db.Column(db.Boolean, default=True, nullable=False)
    stock_quantity = db.Column(db.Integer, default=0, nullable=False)

    rating = db.Column(db.Float, default=0)
    review_count = db.Column(db.Integer, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    reviews = db.relationship("Review", backref="product", lazy=True, cascade="all, delete-orphan")

    def summary(self):
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "original_price": self.original_price,
            "image": self.image,
            "images": self.images or [],
            "category": self.category,
            "in_stock": self.in_stock,
            "stock_quantity": self.stock_quantity,
            "rating": self.rating,
        }

    def to_dict(self):
        data = self.summary()
        data.update({
            "slug": self.slug,
            "description": self.description,
            "review_count": self.review_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        })
        return data


class Review(db.Model):
    __tablename__ = "review"
    __table_args__ = (
        db.UniqueConstraint("user_id", "product_id", name="uq_review_user_product"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("user.id"), nullable=False)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id"), nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=True)
    verified = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "rating": self.rating,
            "comment": self.comment,
            "verified": self.verified,
            "user": {"id": self.user.id, "name": self.user.name} if self.user else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
