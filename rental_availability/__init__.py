import logging

from flask import Flask

from .config import Config
from .controllers.availability import bp as availability_bp
from .models.store import Store


def create_app(config_overrides: dict | None = None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    Store.instance(app.config.get("DATA_PATH"))  # load data.pkl or start empty
    app.register_blueprint(availability_bp)

    return app
