"""
Database helper utilities for the Department Records service
"""

from contextlib import contextmanager

from database import db


@contextmanager
def atomic():
    """Run a block as one transaction: commit on success, roll back on any error.

    The original exception is re-raised unchanged.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def next_sequential_id(existing_ids, prefix='S', width=3):
    """Return prefix + zero-padded number one past the highest numeric suffix"""
    highest = 0
    for value in existing_ids:
        if value and value.startswith(prefix) and value[len(prefix):].isdigit():
            highest = max(highest, int(value[len(prefix):]))
    return f"{prefix}{str(highest + 1).zfill(width)}"
