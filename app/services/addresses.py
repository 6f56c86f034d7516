from models import db
from models.address import Address
from app.services.errors import AddressNotFound
from app.utils.db import transactional


def _unset_other_defaults(user_id, keep_id=None):
    q = Address.query.filter_by(user_id=user_id, is_default=True)
    if keep_id is not None:
        q = q.filter(Address.id != keep_id)
    q.update({"is_default": False}, synchronize_session="fetch")


def list_addresses(user):
    return (
        Address.query.filter_by(user_id=user.id)
        .order_by(Address.is_default.desc(), Address.created_at.desc(), Address.id.desc())
        .all()
    )


def get_address(user, address_id) -> Address:
    address = Address.query.filter_by(id=address_id, user_id=user.id).first()
    if not address:
        raise AddressNotFound()
    return address


def create_address(user, fields: dict) -> Address:
    with transactional("Failed to create address"):
        if fields.get("is_default"):
            _unset_other_defaults(user.id)
        address = Address(user_id=user.id, **fields)
        db.session.add(address)
    return address


def update_address(user, address_id, fields: dict) -> Address:
    address = get_address(user, address_id)
    with transactional("Failed to update address"):
        if fields.get("is_default"):
            _unset_other_defaults(user.id, keep_id=address.id)
        for key, value in fields.items():
            setattr(address, key, value)
    return address


def delete_address(user, address_id) -> None:
    address = get_address(user, address_id)
    with transactional("Failed to delete address"):
        db.session.delete(address)
