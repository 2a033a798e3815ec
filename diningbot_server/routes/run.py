"""Trigger endpoint: one menu run with bounded retries"""

import asyncio
import logging

from flask import Blueprint, Response, current_app

from diningbot_core.orchestrator import run_daily_menu

logger = logging.getLogger(__name__)

run_bp = Blueprint('run', __name__)


@run_bp.route('/', methods=['GET', 'POST'])
def trigger_run():
    """Run the pipeline. Always answers OK; failures only show up in the logs."""
    config = current_app.config["DININGBOT_CONFIG"]

    # Fresh event loop per request to avoid loop state issues
    def _run_in_new_loop():
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            return loop.run_until_complete(
                run_daily_menu(config, max_attempts=config.max_attempts)
            )
        finally:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()
            asyncio.set_event_loop(None)

    try:
        succeeded = _run_in_new_loop()
    except Exception:
        logger.exception("Menu run crashed")
        succeeded = False
    if not succeeded:
        logger.error("Menu run did not succeed")
    return Response("OK", mimetype="text/plain")
