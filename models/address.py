from models import db, BIGINT
from datetime import datetime


class Address(db.Model):
    __tablename__ = "address"

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("user.id"), nullable=False, index=True)
    full_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    address_line1 = db.Column(db.String(255), nullable=False)
    address_line2 = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(100), nullable=False)
    state = db.Column(db.String(100), nullable=False)
    postal_code = db.Column(db.String(20), nullable=False)
    country = db.Column(db.String(100), nullable=False, default="India")
    is_default = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    SNAPSHOT_FIELDS = (
        "full_name", "phone", "address_line1", "address_line2",
        "city", "state", "postal_code", "country",
    )

    def snapshot(self):
        return {f: getattr(self, f) for f in self.SNAPSHOT_FIELDS}

    def to_dict(self):
        data = self.snapshot()
        data.update({
            "id": self.id,
            "is_default": self.is_default,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        })
        return data
