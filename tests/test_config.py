import pytest

from app.config import DevelopmentConfig, ProductionConfig, TestingConfig, get_config_class


def test_testing_config_uses_memory_db(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'testing')
    cfg = get_config_class()
    assert cfg is TestingConfig
    assert cfg.TESTING is True
    assert cfg.SQLALCHEMY_DATABASE_URI.startswith('sqlite://')


def test_development_is_default(monkeypatch):
    monkeypatch.delenv('APP_ENV', raising=False)
    cfg = get_config_class()
    assert cfg is DevelopmentConfig
    assert cfg.DEBUG is True


def test_production_requires_secrets(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    for key in ('SECRET_KEY', 'DATABASE_URL', 'JWT_SECRET'):
        monkeypatch.delenv(key, raising=False)
    with pytest.raises(RuntimeError) as exc:
        get_config_class()
    assert 'JWT_SECRET' in str(exc.value)


def test_production_with_secrets(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.setenv('SECRET_KEY', 's')
    monkeypatch.setenv('DATABASE_URL', 'postgresql://db/shop')
    monkeypatch.setenv('JWT_SECRET', 'j')
    cfg = get_config_class()
    assert cfg is ProductionConfig
    assert cfg.AUTH_COOKIE_SECURE is True


def test_base_limits():
    assert DevelopmentConfig.API_RATE_LIMIT == '100 per minute'
    assert DevelopmentConfig.MAX_CONTENT_LENGTH == 1024 * 1024
    assert DevelopmentConfig.AUTH_COOKIE_NAME == 'auth-token'


def test_testing_app_creates_tables_on_startup():
    from sqlalchemy import inspect
    from app import create_app
    from models import db

    app = create_app(TestingConfig)
    with app.app_context():
        tables = set(inspect(db.engine).get_table_names())
    assert {'product', 'cart_item', 'order', 'order_item'} <= tables
