import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from clusterstore.db import models, schemas
from clusterstore.db.repositories import stacks as repo_stacks


def test_stack_id_parse_and_str():
    sid = schemas.StackId.parse("HDP-2.6.5")
    assert sid.stack_name == "HDP"
    assert sid.stack_version == "2.6.5"
    assert str(sid) == "HDP-2.6.5"
    assert schemas.StackId.parse(str(sid)) == sid


@pytest.mark.parametrize("value", ["HDP", "-2.6", "HDP-", ""])
def test_stack_id_parse_rejects_malformed(value):
    with pytest.raises(ValueError):
        schemas.StackId.parse(value)


def test_stack_id_is_frozen():
    sid = schemas.StackId(stack_name="HDP", stack_version="2.6")
    with pytest.raises(ValidationError):
        sid.stack_name = "PHD"
    assert hash(sid) == hash(schemas.StackId(stack_name="HDP", stack_version="2.6"))


def test_create_find_and_resolve(db_session):
    stack = repo_stacks.create_stack(db_session, models.Stack(stack_name="HDP", stack_version="2.6"))
    assert stack.stack_id is not None

    assert repo_stacks.find_stack_by_id(db_session, stack.stack_id) is stack
    assert repo_stacks.find_stack(db_session, "HDP", "2.6") is stack
    assert repo_stacks.resolve_stack(db_session, schemas.StackId.parse("HDP-2.6")) is stack
    assert repo_stacks.resolve_stack(db_session, schemas.StackId.parse("HDP-9.9")) is None
    assert schemas.Stack.model_validate(stack).key == schemas.StackId.parse("HDP-2.6")


def test_find_all_stacks_sorted(db_session):
    b = repo_stacks.create_stack(db_session, models.Stack(stack_name="HDP", stack_version="3.0"))
    a = repo_stacks.create_stack(db_session, models.Stack(stack_name="HDP", stack_version="2.6"))
    c = repo_stacks.create_stack(db_session, models.Stack(stack_name="BIGTOP", stack_version="1.0"))
    assert repo_stacks.find_all_stacks(db_session) == [c, a, b]


def test_duplicate_stack_rejected(db_session):
    repo_stacks.create_stack(db_session, models.Stack(stack_name="HDP", stack_version="2.6"))
    with pytest.raises(IntegrityError):
        repo_stacks.create_stack(db_session, models.Stack(stack_name="HDP", stack_version="2.6"))


def test_merge_and_remove_detached_stack(session_factory):
    with session_factory() as db:
        stack = repo_stacks.create_stack(db, models.Stack(stack_name="HDP", stack_version="2.6"))
        db.commit()
        db.refresh(stack)
        db.expunge(stack)

    stack.stack_version = "2.6.5"
    with session_factory() as db:
        merged = repo_stacks.merge_stack(db, stack)
        assert repo_stacks.find_stack(db, "HDP", "2.6.5") is merged
        repo_stacks.remove_stack(db, stack)
        assert repo_stacks.find_all_stacks(db) == []
