import itertools
import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')

from models import db
from models.address import Address
from models.product import Product

_slugs = itertools.count(1)


@pytest.fixture(scope='session')
def app_instance():
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    app_instance.extensions['rate_limiter'].reset()
    app_instance.limiter.reset()
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Sign a user in through the test-only stub; returns (user_id, headers)."""
    def _login(email='buyer@example.com', role='customer'):
        resp = client.post('/__auth/login_stub', json={'email': email, 'role': role})
        data = resp.get_json()['data']
        return data['user_id'], {'Authorization': f"Bearer {data['access']}"}
    return _login


@pytest.fixture
def make_product(app):
    def _make(**overrides):
        n = next(_slugs)
        fields = dict(
            name=f'Gold Ring {n}',
            slug=f'gold-ring-{n}',
            description='22k gold band',
            price=1000,
            image='https://example.com/ring.jpg',
            category='rings',
            in_stock=True,
            stock_quantity=10,
        )
        fields.update(overrides)
        product = Product(**fields)
        db.session.add(product)
        db.session.commit()
        return product.id
    return _make


@pytest.fixture
def make_address(app):
    def _make(user_id, **overrides):
        fields = dict(
            full_name='Asha Rao',
            phone='9876543210',
            address_line1='12 MG Road',
            city='Bengaluru',
            state='Karnataka',
            postal_code='560001',
        )
        fields.update(overrides)
        address = Address(user_id=user_id, **fields)
        db.session.add(address)
        db.session.commit()
        return address.id
    return _make
