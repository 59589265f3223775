import logging

from app.core.logging_config import configure_logging
from app.main import app

# Serverless hosts skip app.server, so logging is configured on import here
configure_logging()
logger = logging.getLogger(__name__)

logger.info("Serverless api/index.py initialized")

# Entry point for serverless functions: exports the FastAPI app instance
__all__ = ["app"]
