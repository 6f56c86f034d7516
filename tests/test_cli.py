from models.product import Product
from models.user import User


def test_seed_creates_admin_and_catalog_once(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed", "--admin-password", "admin-pass-1"])
    assert result.exit_code == 0, result.output
    assert "Seeded 4 product(s)." in result.output

    admin = User.query.filter_by(email=app.config["ADMIN_EMAIL"]).one()
    assert admin.role == "admin"
    assert admin.check_password("admin-pass-1")
    assert Product.query.count() == 4

    again = runner.invoke(args=["seed", "--admin-password", "other"])
    assert "Seeded 0 product(s)." in again.output
    assert "Admin user created" not in again.output


def test_schema_commands_refuse_production_without_opt_in(app, monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("ALLOW_DB_MIGRATIONS", raising=False)
    runner = app.test_cli_runner()
    for command in ("db-upgrade-safe", "db-stamp-safe"):
        result = runner.invoke(args=[command])
        assert result.exit_code != 0
        assert "ALLOW_DB_MIGRATIONS" in result.output
