"""
Cluster configuration repository functions.

Implements versioned configuration lookups, next-version computation and
stack-scoped listing of all or only the latest configurations.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from clusterstore.db import models, schemas
from clusterstore.db.repositories import query_utils
from clusterstore.db.repositories.stacks import resolve_stack

logger = logging.getLogger(__name__)


def find_config(db: Session, config_id: int) -> Optional[models.ClusterConfig]:
    return db.get(models.ClusterConfig, config_id)


def find_config_by_tag(
    db: Session, cluster_id: int, type_name: str, tag: str
) -> Optional[models.ClusterConfig]:
    q = db.query(models.ClusterConfig).filter(
        models.ClusterConfig.cluster_id == cluster_id,
        models.ClusterConfig.type_name == type_name,
        models.ClusterConfig.tag == tag,
    )
    return query_utils.select_one(q)


def find_config_by_version(
    db: Session, cluster_id: int, type_name: str, version: int
) -> Optional[models.ClusterConfig]:
    q = db.query(models.ClusterConfig).filter(
        models.ClusterConfig.cluster_id == cluster_id,
        models.ClusterConfig.type_name == type_name,
        models.ClusterConfig.version == version,
    )
    return query_utils.select_one(q)


def find_next_config_version(db: Session, cluster_id: int, type_name: str) -> int:
    """Return the highest existing version for the cluster and type plus one (1 when none exist)."""
    q = db.query(func.coalesce(func.max(models.ClusterConfig.version), 0) + 1).filter(
        models.ClusterConfig.cluster_id == cluster_id,
        models.ClusterConfig.type_name == type_name,
    )
    return int(query_utils.select_single(q, default=1))


def get_all_configurations(
    db: Session, cluster_id: int, stack_id: schemas.StackId
) -> List[models.ClusterConfig]:
    """Every configuration of the cluster for the stack, all versions of each type included."""
    stack = resolve_stack(db, stack_id)
    if stack is None:
        return []
    q = (
        db.query(models.ClusterConfig)
        .filter(
            models.ClusterConfig.cluster_id == cluster_id,
            models.ClusterConfig.stack_id == stack.stack_id,
        )
        .order_by(models.ClusterConfig.type_name, models.ClusterConfig.version)
    )
    return query_utils.select_list(q)


def get_latest_configurations(
    db: Session, cluster_id: int, stack_id: schemas.StackId
) -> List[models.ClusterConfig]:
    """The highest version of each configuration type of the cluster for the stack.

    Exactly one row per type; rows sharing the top version are resolved in
    favour of the highest config_id.
    """
    stack = resolve_stack(db, stack_id)
    if stack is None:
        return []
    ranked = (
        db.query(
            models.ClusterConfig.config_id.label("config_id"),
            func.row_number()
            .over(
                partition_by=models.ClusterConfig.type_name,
                order_by=(
                    models.ClusterConfig.version.desc(),
                    models.ClusterConfig.config_id.desc(),
                ),
            )
            .label("position"),
        )
        .filter(
            models.ClusterConfig.cluster_id == cluster_id,
            models.ClusterConfig.stack_id == stack.stack_id,
        )
        .subquery()
    )
    q = (
        db.query(models.ClusterConfig)
        .join(ranked, models.ClusterConfig.config_id == ranked.c.config_id)
        .filter(ranked.c.position == 1)
        .order_by(models.ClusterConfig.type_name)
    )
    return query_utils.select_list(q)


def create_config(db: Session, config: models.ClusterConfig) -> models.ClusterConfig:
    db.add(config)
    db.flush()
    logger.info(
        "Created config %s/%s version %s for cluster %s",
        config.type_name, config.tag, config.version, config.cluster_id,
    )
    return config


def remove_config(db: Session, config: models.ClusterConfig) -> None:
    db.delete(config)
    db.flush()
