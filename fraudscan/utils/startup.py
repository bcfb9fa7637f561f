"""
Startup initialization logic
Configures logging and loads the rule tables on server startup
"""

import logging
from fastapi import FastAPI

from fraudscan.core.config import settings
from fraudscan.core.rule_tables import get_rule_tables
from fraudscan.services.history import get_scan_history

logger = logging.getLogger(__name__)


def configure_logging(level: str = None):
    """Set up root logging once for the process"""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def initialize_system(app: FastAPI):
    """
    Initialize system components on startup

    Loads the rule tables and the in-memory history up front so the first
    request doesn't pay for it.

    Args:
        app: FastAPI application instance
    """
    try:
        logger.info("[1/2] Loading rule tables...")
        rules = get_rule_tables()
        for table, count in rules.summary().items():
            logger.info(f"  {table}: {count} entries")

        logger.info("[2/2] Preparing scan history...")
        history = get_scan_history()

        app.state.rules = rules
        app.state.history = history
        app.state.initialized = True
        logger.info(f"Server ready - history keeps last {history.max_entries} results")

    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise


def get_init_status(app: FastAPI) -> dict:
    """Get current initialization status"""
    rules = getattr(app.state, "rules", None)
    history = getattr(app.state, "history", None)
    return {
        "initialized": getattr(app.state, "initialized", False),
        "rule_tables": rules.summary() if rules else {},
        "history_entries": len(history) if history is not None else 0,
    }
