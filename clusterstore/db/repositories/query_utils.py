"""
Query execution adapters shared by the repositories.

Normalises "no result" handling so every single-row lookup returns None
instead of raising, and every list lookup returns a list.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, TypeVar

from sqlalchemy.orm import Query

logger = logging.getLogger(__name__)

T = TypeVar("T")


def select_one(query: Query) -> Optional[Any]:
    """Return the only row of ``query``, or None when there is none.

    More than one row means the data breaks a uniqueness expectation; that is
    logged and the first row is returned.
    """
    rows = query.limit(2).all()
    if not rows:
        return None
    if len(rows) > 1:
        logger.warning("Expected at most one row, got several; returning the first: %s", rows[0])
    return rows[0]


def select_single(query: Query, default: Optional[T] = None) -> Optional[T]:
    """Return the scalar value of an aggregate query, ``default`` when it is NULL."""
    value = query.scalar()
    return default if value is None else value


def select_list(query: Query) -> List[Any]:
    return query.all()


def execute_delete(query: Query) -> int:
    """Bulk delete the rows matched by ``query`` and return the row count.

    The statement bypasses the session, so instances already loaded stay in
    the identity map.
    """
    count = query.delete(synchronize_session=False)
    logger.debug("Bulk delete removed %d row(s)", count)
    return count
