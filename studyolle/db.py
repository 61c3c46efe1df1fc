from contextlib import contextmanager
import logging
import sqlite3

from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

# Retrieve main logger
logger = logging.getLogger("main")

db = SQLAlchemy()
migrate = Migrate()


@contextmanager
def transaction():
    """
    Run the enclosed mutations as one unit: commit on success,
    rollback and re-raise on any error.
    """
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Transaction rolled back: {e}")
        db.session.rollback()
        raise
    except Exception:
        db.session.rollback()
        raise


def init_db(app):
    # Models must be registered on the metadata before create_all
    from studyolle import models  # noqa: F401

    with app.app_context():

        @event.listens_for(db.engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if not isinstance(dbapi_connection, sqlite3.Connection):
                return

            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON;")
            cursor.execute("PRAGMA busy_timeout=30000;")
            cursor.close()

        from sqlalchemy import inspect

        inspector = inspect(db.engine)
        if not inspector.has_table("account"):
            logger.info("Initializing database tables...")
        db.create_all()
