from flask import Flask

from campusvote.config import Config
from campusvote.extensions import db, migrate
from campusvote.routes import register_routes


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    if app.config["TALLY_MODE"] not in ("derived", "cached"):
        raise ValueError(f"Unknown TALLY_MODE: {app.config['TALLY_MODE']!r}")

    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so their tables are registered on db.metadata.
    from campusvote import models  # noqa: F401

    register_routes(app)
    return app


app = create_app()

__all__ = ["app", "db", "migrate", "create_app"]
