import os
import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp
from models import db
from models.product import Product
from models.user import User


SAMPLE_PRODUCTS = [
    {
        "name": "Beaumont Summit",
        "slug": "beaumont-summit",
        "description": "Elegant jewelry piece with exquisite craftsmanship.",
        "price": 3300,
        "original_price": 4500,
        "image": "/img/product/1.jpg",
        "category": "women",
        "stock_quantity": 50,
    },
    {
        "name": "Classic Gold Ring",
        "slug": "classic-gold-ring",
        "description": "Timeless classic gold ring for special occasions.",
        "price": 2500,
        "image": "/img/product/2.jpg",
        "category": "rings",
        "stock_quantity": 30,
    },
    {
        "name": "Pearl Drop Earrings",
        "slug": "pearl-drop-earrings",
        "description": "Freshwater pearls on sterling silver hooks.",
        "price": 1800,
        "original_price": 2200,
        "image": "/img/product/3.jpg",
        "category": "earrings",
        "stock_quantity": 40,
    },
    {
        "name": "Silver Chain Necklace",
        "slug": "silver-chain-necklace",
        "description": "Fine sterling silver chain, everyday wear.",
        "price": 450,
        "image": "/img/product/4.jpg",
        "category": "necklaces",
        "stock_quantity": 100,
    },
]

TRUTHY = ("1", "true", "yes")


def _guard_production():
    """Schema changes against production need ALLOW_DB_MIGRATIONS=true."""
    if (os.getenv("APP_ENV") or "").lower() != "production":
        return
    if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in TRUTHY:
        raise click.ClickException(
            "Refusing to touch the production schema without ALLOW_DB_MIGRATIONS=true"
        )


@click.command("db-upgrade-safe")
@click.option("--revision", default="head", help="Target revision, default 'head'")
@with_appcontext
def db_upgrade_safe(revision):
    """Apply pending migrations."""
    _guard_production()
    alembic_upgrade(revision=revision)
    click.echo(f"Database upgraded to {revision}.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Record a revision without running it (for databases built by create_all)."""
    _guard_production()
    alembic_stamp(revision=revision)
    click.echo(f"Database stamped at {revision}.")


@click.command("seed")
@click.option("--admin-password", envvar="ADMIN_PASSWORD", required=True, help="Password for the admin account")
@with_appcontext
def seed(admin_password):
    """Create the admin account and the sample catalog; existing rows are left alone."""
    email = current_app.config["ADMIN_EMAIL"]
    if User.query.filter_by(email=email).first() is None:
        admin = User(email=email, name="Admin User", role="admin")
        admin.set_password(admin_password)
        db.session.add(admin)
        click.echo(f"Admin user created: {email}")

    existing = {slug for (slug,) in db.session.query(Product.slug)}
    new_products = [
        Product(images=[fields["image"]], in_stock=True, **fields)
        for fields in SAMPLE_PRODUCTS
        if fields["slug"] not in existing
    ]
    db.session.add_all(new_products)
    db.session.commit()
    click.echo(f"Seeded {len(new_products)} product(s).")


def register_cli(app):
    for command in (db_upgrade_safe, db_stamp_safe, seed):
        app.cli.add_command(command)
