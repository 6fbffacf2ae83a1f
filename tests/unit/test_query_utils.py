import logging

from sqlalchemy import func

from clusterstore.db import models
from clusterstore.db.repositories import query_utils


def test_select_one_none_and_single(db_session, make_cluster):
    q = db_session.query(models.Cluster).filter(models.Cluster.cluster_name == "x")
    assert query_utils.select_one(q) is None

    cluster = make_cluster("x")
    assert query_utils.select_one(q) is cluster


def test_select_one_several_rows_logs_and_returns_first(db_session, make_cluster, caplog):
    first = make_cluster("a")
    make_cluster("b")
    q = db_session.query(models.Cluster).order_by(models.Cluster.cluster_id)

    with caplog.at_level(logging.WARNING, logger="clusterstore.db.repositories.query_utils"):
        assert query_utils.select_one(q) is first
    assert "several" in caplog.text


def test_select_single_uses_default_for_null(db_session):
    q = db_session.query(func.max(models.ClusterConfig.version))
    assert query_utils.select_single(q) is None
    assert query_utils.select_single(q, default=0) == 0


def test_select_list_is_always_a_list(db_session, make_cluster):
    q = db_session.query(models.Cluster)
    assert query_utils.select_list(q) == []
    cluster = make_cluster()
    assert query_utils.select_list(q) == [cluster]


def test_execute_delete_returns_count(db_session, make_cluster):
    make_cluster("a")
    make_cluster("b")
    q = db_session.query(models.Cluster).filter(models.Cluster.cluster_name == "a")
    assert query_utils.execute_delete(q) == 1
    assert db_session.query(models.Cluster.cluster_name).scalar() == "b"
