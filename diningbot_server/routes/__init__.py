"""Routes module for Flask endpoints"""

from diningbot_server.routes.health import health_bp
from diningbot_server.routes.run import run_bp

__all__ = ['health_bp', 'run_bp']
