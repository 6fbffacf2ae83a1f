import pytest

from clusterstore.db import models
from clusterstore.db.database import SQLITE_MEMORY_URL, create_db_engine, make_session_factory
from clusterstore.settings import refresh_settings_cache


@pytest.fixture(scope="session")
def engine():
    refresh_settings_cache()
    eng = create_db_engine(SQLITE_MEMORY_URL)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    models.Base.metadata.create_all(bind=engine)
    try:
        yield make_session_factory(engine)
    finally:
        models.Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def hdp_stack(db_session):
    stack = models.Stack(stack_name="HDP", stack_version="2.6")
    db_session.add(stack)
    db_session.flush()
    return stack


@pytest.fixture
def make_cluster(db_session, hdp_stack):
    counter = {"n": 0}

    def _make(name: str | None = None, resource_id: int | None = None) -> models.Cluster:
        counter["n"] += 1
        cluster = models.Cluster(
            cluster_name=name or f"cluster_{counter['n']}",
            resource_id=resource_id if resource_id is not None else 100 + counter["n"],
            desired_stack_id=hdp_stack.stack_id,
        )
        db_session.add(cluster)
        db_session.flush()
        return cluster

    return _make
