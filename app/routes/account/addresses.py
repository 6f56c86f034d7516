from flask import request
from app.schemas.address import AddressRequest, AddressUpdateRequest
from app.services import addresses as address_service
from app.utils import ok, validate_schema
from . import account_bp


@account_bp.route("/addresses", methods=["GET"])
def get_addresses():
    return ok([a.to_dict() for a in address_service.list_addresses(request.user)])


@account_bp.route("/addresses", methods=["POST"])
@validate_schema(AddressRequest)
def create_address():
    fields = request.validated_data.model_dump()
    address = address_service.create_address(request.user, fields)
    return ok(address.to_dict(), message="Address added successfully", status=201)


@account_bp.route("/addresses/<int:address_id>", methods=["PUT"])
@validate_schema(AddressUpdateRequest)
def update_address(address_id):
    fields = request.validated_data.model_dump(exclude_unset=True)
    address = address_service.update_address(request.user, address_id, fields)
    return ok(address.to_dict(), message="Address updated successfully")


@account_bp.route("/addresses/<int:address_id>", methods=["DELETE"])
def delete_address(address_id):
    address_service.delete_address(request.user, address_id)
    return ok(message="Address deleted successfully")
