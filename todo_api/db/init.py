"""Initialize database tables."""
import logging

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

# Imported for their side effect of registering tables on SQLModel.metadata
from todo_api.models.user import User  # noqa: F401
from todo_api.models.task import Task  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    logger.info("Creating database tables on %s", engine.url.get_backend_name())
    SQLModel.metadata.create_all(engine)
