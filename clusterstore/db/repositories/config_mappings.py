"""
Cluster configuration mapping repository functions.

Implements stack- and cluster-scoped mapping reads, single and batch merges,
and bulk removal by configuration type.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from sqlalchemy import and_
from sqlalchemy.orm import Session

from clusterstore.db import models, schemas
from clusterstore.db.repositories import query_utils
from clusterstore.db.repositories.stacks import resolve_stack

logger = logging.getLogger(__name__)


def get_cluster_config_mappings_by_stack(
    db: Session, cluster_id: int, stack_id: schemas.StackId
) -> List[models.ClusterConfigMapping]:
    """Mappings of the cluster whose type and tag point at a configuration of the stack."""
    stack = resolve_stack(db, stack_id)
    if stack is None:
        return []
    mapping = models.ClusterConfigMapping
    config = models.ClusterConfig
    q = (
        db.query(mapping)
        .join(
            config,
            and_(
                config.cluster_id == mapping.cluster_id,
                config.type_name == mapping.type_name,
                config.tag == mapping.tag,
            ),
        )
        .filter(mapping.cluster_id == cluster_id, config.stack_id == stack.stack_id)
        .order_by(mapping.type_name, mapping.create_timestamp)
    )
    return query_utils.select_list(q)


def get_cluster_config_mapping_entities_by_cluster(
    db: Session, cluster_id: int
) -> List[models.ClusterConfigMapping]:
    q = (
        db.query(models.ClusterConfigMapping)
        .filter(models.ClusterConfigMapping.cluster_id == cluster_id)
        .order_by(models.ClusterConfigMapping.type_name, models.ClusterConfigMapping.create_timestamp)
    )
    return query_utils.select_list(q)


def merge_config_mapping(
    db: Session, mapping: models.ClusterConfigMapping
) -> models.ClusterConfigMapping:
    managed = db.merge(mapping)
    db.flush()
    return managed


def merge_config_mappings(
    db: Session, mappings: Iterable[models.ClusterConfigMapping]
) -> List[models.ClusterConfigMapping]:
    """Merge each mapping in turn. A failure part-way leaves earlier merges to the caller's rollback."""
    merged = [db.merge(mapping) for mapping in mappings]
    db.flush()
    return merged


def persist_config_mapping(
    db: Session, mapping: models.ClusterConfigMapping
) -> models.ClusterConfigMapping:
    db.add(mapping)
    db.flush()
    return mapping


def remove_config_mapping(db: Session, mapping: models.ClusterConfigMapping) -> None:
    db.delete(mapping)
    db.flush()


def remove_cluster_config_mapping_entity_by_types(
    db: Session, cluster_id: int, types: Iterable[str]
) -> int:
    """Delete the cluster's mappings whose type is in ``types``; returns the row count.

    An empty ``types`` deletes nothing and issues no statement, since an empty
    IN list is not valid SQL on every backend.
    """
    type_names = list(types)
    if not type_names:
        return 0
    q = db.query(models.ClusterConfigMapping).filter(
        models.ClusterConfigMapping.cluster_id == cluster_id,
        models.ClusterConfigMapping.type_name.in_(type_names),
    )
    count = query_utils.execute_delete(q)
    # The bulk delete skips the identity map; drop the loaded cluster's stale collection
    loaded = db.identity_map.get(db.identity_key(models.Cluster, cluster_id))
    if loaded is not None:
        db.expire(loaded, ["config_mapping_entities"])
    logger.info("Removed %d config mapping(s) of types %s for cluster %s", count, type_names, cluster_id)
    return count
