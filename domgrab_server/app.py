"""Flask application setup for domgrab server"""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from domgrab_core.config import config
from domgrab_core.executor import ScrapeExecutor
from domgrab_server.routes.health import health_bp
from domgrab_server.routes.scrape import scrape_bp

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def create_app(executor: Optional[ScrapeExecutor] = None) -> Flask:
    app = Flask(__name__)
    CORS(app)
    # Keep error bodies in {error, details, type, stack} order
    app.json.sort_keys = False
    app.config['SCRAPE_EXECUTOR'] = executor or ScrapeExecutor(config)

    # Register blueprints
    app.register_blueprint(health_bp)
    app.register_blueprint(scrape_bp)
    return app


app = create_app()
