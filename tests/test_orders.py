from models import db
from models.cart import CartItem
from models.order import Order, OrderItem
from models.product import Product
from app.version import API_PREFIX


def add_to_cart(client, headers, product_id, quantity):
    return client.post(f"{API_PREFIX}/cart", json={"product_id": product_id, "quantity": quantity}, headers=headers)


def place(client, headers, address_id, path="/orders", **extra):
    body = {"address_id": address_id, "payment_method": "COD"}
    body.update(extra)
    return client.post(f"{API_PREFIX}{path}", json=body, headers=headers)


# -------------------- Preconditions --------------------

def test_place_order_requires_authentication(client):
    resp = client.post(f"{API_PREFIX}/orders", json={"address_id": 1, "payment_method": "COD"})
    assert resp.status_code == 401
    body = resp.get_json()
    assert body["success"] is False
    assert body["code"] == "NOT_AUTHENTICATED"


def test_empty_cart_rejected(client, login, make_address):
    user_id, headers = login()
    address_id = make_address(user_id)
    resp = place(client, headers, address_id)
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "EMPTY_CART"
    assert Order.query.count() == 0


def test_insufficient_stock_names_product_and_mutates_nothing(client, login, make_product, make_address):
    user_id, headers = login()
    address_id = make_address(user_id)
    pid = make_product(name="Ruby Pendant", stock_quantity=1)
    assert add_to_cart(client, headers, pid, 2).status_code == 200

    resp = place(client, headers, address_id)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["code"] == "INSUFFICIENT_STOCK"
    assert "Ruby Pendant" in body["error"]

    db.session.expire_all()
    assert Order.query.count() == 0
    assert db.session.get(Product, pid).stock_quantity == 1
    assert CartItem.query.filter_by(user_id=user_id).count() == 1


def test_out_of_stock_flag_rejected(client, login, make_product, make_address):
    user_id, headers = login()
    address_id = make_address(user_id)
    pid = make_product(stock_quantity=5)
    add_to_cart(client, headers, pid, 1)
    product = db.session.get(Product, pid)
    product.in_stock = False
    db.session.commit()

    resp = place(client, headers, address_id)
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INSUFFICIENT_STOCK"


def test_foreign_address_rejected(client, login, make_product, make_address):
    other_id, _ = login("other@example.com")
    foreign_address = make_address(other_id)
    _, headers = login()
    add_to_cart(client, headers, make_product(), 1)

    resp = place(client, headers, foreign_address)
    assert resp.status_code == 404
    assert resp.get_json()["code"] == "ADDRESS_NOT_FOUND"
    assert Order.query.count() == 0


def test_missing_payment_method_is_validation_error(client, login):
    _, headers = login()
    resp = client.post(f"{API_PREFIX}/orders", json={"address_id": 1}, headers=headers)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["code"] == "VALIDATION_ERROR"
    assert "payment_method" in body["error"]


# -------------------- Atomic section --------------------

def test_order_commits_items_stock_and_clears_cart(client, login, make_product, make_address):
    user_id, headers = login()
    address_id = make_address(user_id)
    ring = make_product(name="Gold Ring", price=1000, stock_quantity=2)
    chain = make_product(name="Silver Chain", price=300, stock_quantity=5)
    add_to_cart(client, headers, ring, 2)
    add_to_cart(client, headers, chain, 1)

    resp = place(client, headers, address_id, notes="Gift wrap")
    assert resp.status_code == 201
    order = resp.get_json()["data"]
    assert order["status"] == "PENDING"
    assert order["subtotal"] == 2300
    assert order["shipping"] == 0
    assert order["tax"] == 414
    assert order["total"] == 2714
    assert order["notes"] == "Gift wrap"
    assert {(i["name"], i["quantity"], i["price"]) for i in order["items"]} == {
        ("Gold Ring", 2, 1000),
        ("Silver Chain", 1, 300),
    }

    db.session.expire_all()
    ring_row = db.session.get(Product, ring)
    chain_row = db.session.get(Product, chain)
    assert ring_row.stock_quantity == 0
    assert ring_row.in_stock is False
    assert chain_row.stock_quantity == 4
    assert chain_row.in_stock is True
    assert CartItem.query.filter_by(user_id=user_id).count() == 0


def test_item_price_is_captured_at_order_time(client, login, make_product, make_address):
    user_id, headers = login()
    address_id = make_address(user_id)
    pid = make_product(price=800)
    add_to_cart(client, headers, pid, 1)
    order_id = place(client, headers, address_id).get_json()["data"]["id"]

    product = db.session.get(Product, pid)
    product.price = 999
    db.session.commit()

    detail = client.get(f"{API_PREFIX}/orders/{order_id}", headers=headers).get_json()["data"]
    assert detail["items"][0]["price"] == 800


def test_address_snapshot_survives_address_edit(client, login, make_product, make_address):
    user_id, headers = login()
    address_id = make_address(user_id, city="Mysuru")
    add_to_cart(client, headers, make_product(), 1)
    order_id = place(client, headers, address_id).get_json()["data"]["id"]

    resp = client.put(f"{API_PREFIX}/addresses/{address_id}", json={"city": "Chennai"}, headers=headers)
    assert resp.status_code == 200

    detail = client.get(f"{API_PREFIX}/orders/{order_id}", headers=headers).get_json()["data"]
    assert detail["address"]["city"] == "Mysuru"
    assert detail["address"]["address_id"] == address_id


def test_failure_inside_transaction_rolls_everything_back(client, login, make_product, make_address, monkeypatch):
    user_id, headers = login()
    address_id = make_address(user_id)
    pid = make_product(stock_quantity=3)
    add_to_cart(client, headers, pid, 2)

    def broken_clear(user_id):
        raise RuntimeError("cart table locked")

    monkeypatch.setattr("app.services.orders._clear_cart", broken_clear)
    resp = place(client, headers, address_id)
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["error"] == "Failed to place order"
    assert "locked" not in body["error"]

    db.session.expire_all()
    assert Order.query.count() == 0
    assert OrderItem.query.count() == 0
    assert db.session.get(Product, pid).stock_quantity == 3
    assert CartItem.query.filter_by(user_id=user_id).count() == 1


def test_checkout_alias_places_order(client, login, make_product, make_address):
    user_id, headers = login()
    address_id = make_address(user_id)
    add_to_cart(client, headers, make_product(price=200), 1)
    resp = place(client, headers, address_id, path="/checkout", payment_method="UPI", payment_id="pay_123")
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["payment_method"] == "UPI"
    assert data["payment_id"] == "pay_123"
    assert data["shipping"] == 50


# -------------------- Reads --------------------

def test_order_list_and_detail_are_owner_scoped(client, login, make_product, make_address):
    user_id, headers = login()
    address_id = make_address(user_id)
    for _ in range(2):
        add_to_cart(client, headers, make_product(), 1)
        place(client, headers, address_id)

    listing = client.get(f"{API_PREFIX}/orders", headers=headers).get_json()
    assert listing["count"] == 2
    newest, oldest = listing["data"]
    assert newest["id"] > oldest["id"]

    _, other_headers = login("other@example.com")
    resp = client.get(f"{API_PREFIX}/orders/{newest['id']}", headers=other_headers)
    assert resp.status_code == 404
    assert client.get(f"{API_PREFIX}/orders", headers=other_headers).get_json()["count"] == 0
