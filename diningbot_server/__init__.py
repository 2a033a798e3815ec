"""
diningbot_server - on-demand trigger and command-line entry point for the dining bot
"""

from diningbot_server.app import create_app, run_server

__all__ = [
    'create_app',
    'run_server',
]
