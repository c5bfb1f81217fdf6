"""
domgrab_server - HTTP API for per-request browser scraping
POST /scrape extracts one element by CSS selector or XPath
"""

from domgrab_core.config import Config, config
from domgrab_core.executor import ScrapeExecutor
from domgrab_server.app import app, create_app

__all__ = [
    'Config',
    'config',
    'ScrapeExecutor',
    'app',
    'create_app',
]
