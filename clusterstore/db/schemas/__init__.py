"""
Pydantic schemas: the stack key used to scope configuration queries and
read models for the ORM entities.
"""

from .stacks import StackId, Stack
from .clusters import Cluster
from .configs import ClusterConfig, ClusterConfigMapping

__all__ = [
    "StackId",
    "Stack",
    "Cluster",
    "ClusterConfig",
    "ClusterConfigMapping",
]
