"""Flask application setup for the dining bot listener"""

import logging

from flask import Flask
from flask_cors import CORS

from diningbot_core.config import Config
from diningbot_server.routes.health import health_bp
from diningbot_server.routes.run import run_bp

logger = logging.getLogger(__name__)

CONFIG_KEY = "DININGBOT_CONFIG"


def create_app(config: Config) -> Flask:
    app = Flask(__name__)
    CORS(app)
    app.config[CONFIG_KEY] = config

    # Register blueprints
    app.register_blueprint(health_bp)
    app.register_blueprint(run_bp)
    return app


def run_server(config: Config) -> None:
    logger.info(f"Running in server mode on port {config.port}")
    logger.info(f"Browser mode: {config.browser_mode}")
    logger.info(f"Retry attempts per request: {config.max_attempts}")
    app = create_app(config)
    app.run(host='0.0.0.0', port=config.port, debug=False, use_reloader=False)
