"""
Shared SQLAlchemy base and helpers.
"""
import time

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import declarative_base


def now_millis() -> int:
    """Return the current time as epoch milliseconds, the unit timestamp columns use."""
    return int(time.time() * 1000)


# BIGINT primary keys do not autoincrement on SQLite; INTEGER aliases the rowid there.
BigIntegerPK = BigInteger().with_variant(Integer, "sqlite")

Base = declarative_base()
