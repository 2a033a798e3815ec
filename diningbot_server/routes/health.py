"""Health check endpoint"""

from flask import Blueprint, current_app, jsonify

from diningbot_core import __version__

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    config = current_app.config["DININGBOT_CONFIG"]
    return jsonify({
        "status": "healthy",
        "browser_mode": config.browser_mode,
        "period": config.period_name,
        "version": __version__,
    })
