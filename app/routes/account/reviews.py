from flask import request
from app.schemas.catalog import ReviewRequest
from app.services.reviews import submit_review
from app.utils import ok, role_required, validate_schema
from . import account_bp


@account_bp.route("/reviews", methods=["POST"])
@role_required(["customer:write_review", "admin"])
@validate_schema(ReviewRequest)
def create_review():
    data: ReviewRequest = request.validated_data
    review = submit_review(request.user, data.product_id, data.rating, data.comment)
    return ok(review.to_dict(), message="Review submitted successfully")
