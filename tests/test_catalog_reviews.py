from models import db
from models.order import Order, OrderItem
from models.product import Product
from app.version import API_PREFIX


def test_product_listing_filters_sort_and_pagination(client, make_product):
    make_product(name="Diamond Ring", price=5000, category="rings")
    make_product(name="Pearl Earrings", price=1500, category="earrings", description="Freshwater pearls")
    make_product(name="Silver Ring", price=800, category="rings")

    resp = client.get(f"{API_PREFIX}/products?category=rings&sort_by=price&sort_order=asc")
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "public, s-maxage=60, stale-while-revalidate=120"
    body = resp.get_json()
    assert [p["name"] for p in body["data"]] == ["Silver Ring", "Diamond Ring"]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 2, "total_pages": 1}

    resp = client.get(f"{API_PREFIX}/products?min_price=1000&max_price=2000")
    assert [p["name"] for p in resp.get_json()["data"]] == ["Pearl Earrings"]

    resp = client.get(f"{API_PREFIX}/products?search=PEARL")
    assert len(resp.get_json()["data"]) == 1

    resp = client.get(f"{API_PREFIX}/products?sort_by=name&sort_order=asc&limit=2&page=2")
    body = resp.get_json()
    assert [p["name"] for p in body["data"]] == ["Silver Ring"]
    assert body["pagination"]["total_pages"] == 2


def test_product_listing_rejects_bad_sort(client):
    resp = client.get(f"{API_PREFIX}/products?sort_by=popularity")
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "VALIDATION_ERROR"


def test_product_detail_and_missing(client, make_product):
    pid = make_product(name="Emerald Necklace")
    resp = client.get(f"{API_PREFIX}/products/{pid}")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["name"] == "Emerald Necklace"
    assert data["reviews"] == []

    missing = client.get(f"{API_PREFIX}/products/9999")
    assert missing.status_code == 404
    assert missing.get_json()["code"] == "NOT_FOUND"


def deliver(user_id, product_id):
    order = Order(
        user_id=user_id,
        payment_method="COD",
        subtotal=1000, shipping=0, tax=180, total=1180,
        status="DELIVERED",
        ship_full_name="Asha Rao", ship_phone="9876543210",
        ship_address_line1="12 MG Road", ship_city="Bengaluru",
        ship_state="Karnataka", ship_postal_code="560001", ship_country="India",
    )
    order.items.append(OrderItem(product_id=product_id, product_name="Ring", quantity=1, price=1000))
    db.session.add(order)
    db.session.commit()


def test_review_upsert_escapes_and_recomputes_rating(client, login, make_product):
    pid = make_product()
    _, headers = login()
    resp = client.post(
        f"{API_PREFIX}/reviews",
        json={"product_id": pid, "rating": 5, "comment": "<b>Lovely</b>"},
        headers=headers,
    )
    assert resp.status_code == 200
    review = resp.get_json()["data"]
    assert review["comment"] == "&lt;b&gt;Lovely&lt;/b&gt;"
    assert review["verified"] is False

    # second submission replaces the first
    client.post(f"{API_PREFIX}/reviews", json={"product_id": pid, "rating": 3}, headers=headers)
    _, other = login("other@example.com")
    client.post(f"{API_PREFIX}/reviews", json={"product_id": pid, "rating": 4}, headers=other)

    listing = client.get(f"{API_PREFIX}/reviews?product_id={pid}").get_json()["data"]
    assert listing["count"] == 2
    assert listing["average_rating"] == 3.5

    db.session.expire_all()
    product = db.session.get(Product, pid)
    assert product.review_count == 2
    assert product.rating == 3.5


def test_review_verified_after_delivery(client, login, make_product):
    pid = make_product()
    user_id, headers = login()
    deliver(user_id, pid)
    resp = client.post(f"{API_PREFIX}/reviews", json={"product_id": pid, "rating": 4}, headers=headers)
    assert resp.get_json()["data"]["verified"] is True


def test_review_rating_bounds_and_product_required(client, login, make_product):
    _, headers = login()
    resp = client.post(f"{API_PREFIX}/reviews", json={"product_id": make_product(), "rating": 6}, headers=headers)
    assert resp.status_code == 400
    assert client.get(f"{API_PREFIX}/reviews").status_code == 400
