import logging
from typing import Dict

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_CONFIGURED: Dict[str, bool] = {}


def configure_logging(debug: bool = False) -> logging.Logger:
    """Configure root logging once per process.

    DEBUG when ``debug`` is set (DININGBOT_DEBUG), INFO otherwise.
    Repeated calls only adjust the level so handlers are never duplicated.
    """
    root = logging.getLogger()
    level = logging.DEBUG if debug else logging.INFO
    if not _CONFIGURED.get("root"):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _CONFIGURED["root"] = True
    root.setLevel(level)
    for h in root.handlers:
        h.setLevel(level)
    if not debug:
        logging.getLogger("asyncio").setLevel(logging.WARNING)
    return root
