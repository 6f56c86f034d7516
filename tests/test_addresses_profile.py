from models.address import Address
from app.version import API_PREFIX

ADDRESS = {
    "full_name": "Asha Rao",
    "phone": "9876543210",
    "address_line1": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "postal_code": "560001",
}


def create(client, headers, **overrides):
    body = dict(ADDRESS, **overrides)
    return client.post(f"{API_PREFIX}/addresses", json=body, headers=headers)


def test_create_address_defaults_country(client, login):
    _, headers = login()
    resp = create(client, headers)
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["country"] == "India"
    assert data["is_default"] is False


def test_only_one_default_address_per_user(client, login):
    user_id, headers = login()
    first = create(client, headers, is_default=True).get_json()["data"]
    second = create(client, headers, is_default=True).get_json()["data"]

    defaults = Address.query.filter_by(user_id=user_id, is_default=True).all()
    assert [a.id for a in defaults] == [second["id"]]

    resp = client.put(f"{API_PREFIX}/addresses/{first['id']}", json={"is_default": True}, headers=headers)
    assert resp.status_code == 200
    listing = client.get(f"{API_PREFIX}/addresses", headers=headers).get_json()["data"]
    assert [a["is_default"] for a in listing] == [True, False]
    assert listing[0]["id"] == first["id"]


def test_default_flag_is_per_user(client, login):
    _, other_headers = login("other@example.com")
    other = create(client, other_headers, is_default=True).get_json()["data"]
    _, headers = login()
    create(client, headers, is_default=True)

    mine = client.get(f"{API_PREFIX}/addresses", headers=other_headers).get_json()["data"]
    assert mine[0]["id"] == other["id"]
    assert mine[0]["is_default"] is True


def test_address_validation_and_ownership(client, login):
    _, headers = login()
    resp = create(client, headers, postal_code="12")
    assert resp.status_code == 400
    assert resp.get_json()["error"].startswith("postal_code")

    address = create(client, headers).get_json()["data"]
    _, intruder = login("intruder@example.com")
    assert client.delete(f"{API_PREFIX}/addresses/{address['id']}", headers=intruder).status_code == 404
    assert client.delete(f"{API_PREFIX}/addresses/{address['id']}", headers=headers).status_code == 200


def test_profile_read_and_update(client, login):
    _, headers = login()
    create(client, headers)
    profile = client.get(f"{API_PREFIX}/users/me", headers=headers).get_json()["data"]
    assert profile["email"] == "buyer@example.com"
    assert len(profile["addresses"]) == 1

    resp = client.put(f"{API_PREFIX}/users/me", json={"name": "Asha", "phone": "9000000000"}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["name"] == "Asha"
    assert resp.get_json()["data"]["phone"] == "9000000000"
