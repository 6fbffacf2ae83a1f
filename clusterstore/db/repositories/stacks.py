"""
Stack repository functions.

Resolves stack name/version pairs to stack rows; configuration queries are
scoped by the resolved stack.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from clusterstore.db import models, schemas
from clusterstore.db.repositories import query_utils

logger = logging.getLogger(__name__)


def find_stack_by_id(db: Session, stack_id: int) -> Optional[models.Stack]:
    return db.get(models.Stack, stack_id)


def find_stack(db: Session, stack_name: str, stack_version: str) -> Optional[models.Stack]:
    q = db.query(models.Stack).filter(
        models.Stack.stack_name == stack_name,
        models.Stack.stack_version == stack_version,
    )
    return query_utils.select_one(q)


def resolve_stack(db: Session, stack_id: schemas.StackId) -> Optional[models.Stack]:
    stack = find_stack(db, stack_id.stack_name, stack_id.stack_version)
    if stack is None:
        logger.debug("Stack %s is not registered", stack_id)
    return stack


def find_all_stacks(db: Session) -> List[models.Stack]:
    q = db.query(models.Stack).order_by(models.Stack.stack_name, models.Stack.stack_version)
    return query_utils.select_list(q)


def create_stack(db: Session, stack: models.Stack) -> models.Stack:
    db.add(stack)
    db.flush()
    logger.info("Created stack %s-%s (id=%s)", stack.stack_name, stack.stack_version, stack.stack_id)
    return stack


def merge_stack(db: Session, stack: models.Stack) -> models.Stack:
    merged = db.merge(stack)
    db.flush()
    return merged


def remove_stack(db: Session, stack: models.Stack) -> None:
    db.delete(db.merge(stack))
    db.flush()
