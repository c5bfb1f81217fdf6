"""Scrape endpoint"""

import json
import logging

from flask import Blueprint, Response, current_app, jsonify, request

from domgrab_core.executor import run_scrape
from domgrab_core.models import is_truthy

logger = logging.getLogger(__name__)

scrape_bp = Blueprint('scrape', __name__)


@scrape_bp.route('/scrape', methods=['POST'])
def scrape():
    """Launch a browser, extract the selector from the url and tear it all down"""
    data = request.get_json(silent=True)
    if isinstance(data, dict) and is_truthy(data.get('debug', False)):
        logger.info(f"[DEBUG] Raw request body received: {json.dumps(data, indent=2)}")

    executor = current_app.config['SCRAPE_EXECUTOR']
    result = run_scrape(executor, data)

    if result.content_type.startswith('text/html'):
        return Response(result.body, status=result.status, content_type=result.content_type)
    response = jsonify(result.body)
    response.status_code = result.status
    return response
