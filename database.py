"""
Database configuration and initialization for the Department Records service
"""

from functools import wraps

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

# Initialize SQLAlchemy instance
db = SQLAlchemy()


def init_db(app):
    """Create all tables with application context"""
    with app.app_context():
        # Import all models to ensure they are registered
        from models import Student, Course, AttendanceRecord, Mark  # noqa: F401

        db.create_all()
        app.logger.info("Database initialized (%s)", app.config['SQLALCHEMY_DATABASE_URI'])


class DatabaseError(Exception):
    """Custom exception for database operations"""
    pass


def handle_db_error(func):
    """Decorator to roll back and wrap unexpected database failures.

    Only SQLAlchemy errors are wrapped; domain errors raised by the wrapped
    function propagate unchanged after the rollback.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise DatabaseError(f"Database operation failed: {str(e)}") from e
    return wrapper
