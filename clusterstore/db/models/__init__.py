"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_millis`, and all ORM classes from one place.
"""

from .base import Base, now_millis  # re-export

from .stacks import Stack
from .clusters import Cluster
from .configs import ClusterConfig, ClusterConfigMapping

__all__ = [
    "Base",
    "now_millis",
    "Stack",
    "Cluster",
    "ClusterConfig",
    "ClusterConfigMapping",
]
