"""Health check endpoint"""

import time

from flask import Blueprint, jsonify

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """Liveness probe; never touches the browser"""
    return jsonify({
        "status": "alive",
        "timestamp": int(time.time() * 1000),
    })
