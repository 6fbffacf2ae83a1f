"""
Cluster repository functions.

Implements lookups by id, name and resource id, plus create, merge and the
merge-then-delete removal helpers.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from clusterstore.db import models
from clusterstore.db.repositories import query_utils

logger = logging.getLogger(__name__)


def find_cluster(db: Session, cluster_id: int) -> Optional[models.Cluster]:
    return db.get(models.Cluster, cluster_id)


def find_cluster_by_name(db: Session, cluster_name: str) -> Optional[models.Cluster]:
    q = db.query(models.Cluster).filter(models.Cluster.cluster_name == cluster_name)
    return query_utils.select_one(q)


def find_cluster_by_resource_id(db: Session, resource_id: int) -> Optional[models.Cluster]:
    q = db.query(models.Cluster).filter(models.Cluster.resource_id == resource_id)
    return query_utils.select_one(q)


def find_all_clusters(db: Session) -> List[models.Cluster]:
    """Return every cluster ordered by id; an empty list when there are none."""
    q = db.query(models.Cluster).order_by(models.Cluster.cluster_id)
    return query_utils.select_list(q)


def create_cluster(db: Session, cluster: models.Cluster) -> models.Cluster:
    """Insert ``cluster``. A duplicate name or resource id raises IntegrityError on flush."""
    db.add(cluster)
    db.flush()
    logger.info("Created cluster %r (id=%s)", cluster.cluster_name, cluster.cluster_id)
    return cluster


def merge_cluster(db: Session, cluster: models.Cluster, flush: bool = False) -> models.Cluster:
    """Copy the state of ``cluster`` onto its managed instance and return that instance.

    With ``flush=True`` every queued change in the session, this merge
    included, is written to the database before returning.
    """
    managed = db.merge(cluster)
    if flush:
        db.flush()
    return managed


def refresh_cluster(db: Session, cluster: models.Cluster) -> None:
    """Reload ``cluster`` from the database, discarding unflushed changes."""
    db.refresh(cluster)


def remove_cluster(db: Session, cluster: models.Cluster) -> None:
    # Merge first so detached instances can be deleted without re-fetching
    managed = merge_cluster(db, cluster, flush=True)
    # Rows inserted by foreign key never join an already-loaded collection, and
    # bulk deletes leave stale members behind; reload both so the delete
    # cascade matches what is stored.
    db.expire(managed, ["config_entities", "config_mapping_entities"])
    db.delete(managed)
    db.flush()
    logger.info("Removed cluster %r (id=%s)", managed.cluster_name, managed.cluster_id)


def remove_cluster_by_name(db: Session, cluster_name: str) -> bool:
    cluster = find_cluster_by_name(db, cluster_name)
    if cluster is None:
        logger.debug("No cluster named %r to remove", cluster_name)
        return False
    remove_cluster(db, cluster)
    return True


def remove_cluster_by_pk(db: Session, cluster_id: int) -> bool:
    cluster = find_cluster(db, cluster_id)
    if cluster is None:
        logger.debug("No cluster with id %s to remove", cluster_id)
        return False
    remove_cluster(db, cluster)
    return True


def is_managed(db: Session, entity: object) -> bool:
    """Return True when ``entity`` is tracked by ``db``."""
    return entity in db
