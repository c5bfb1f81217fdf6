"""Routes module for Flask endpoints"""

from domgrab_server.routes.health import health_bp
from domgrab_server.routes.scrape import scrape_bp

__all__ = ['health_bp', 'scrape_bp']
