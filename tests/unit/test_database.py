"""Unit tests for engine setup and unit-of-work handling."""

from unittest.mock import Mock

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from aiqa.errors import NotFoundError, UpstreamUnavailableError
from aiqa.models import Alert
from aiqa.repositories import AlertRepository
from aiqa.utils.database import _redact, get_engine, get_session, session_scope


def test_init_database_creates_tables(session_factory):
    tables = set(inspect(get_engine()).get_table_names())
    assert {"ai_metrics", "ai_alerts", "parent_feedback", "review_items"} <= tables


def test_session_scope_commits_on_success():
    session = Mock()

    with session_scope(lambda: session):
        pass

    session.commit.assert_called_once()
    session.close.assert_called_once()
    assert not session.rollback.called


def test_storage_errors_become_upstream_unavailable():
    session = Mock()
    error = OperationalError("SELECT 1", {}, Exception("database is locked"))

    with pytest.raises(UpstreamUnavailableError) as excinfo:
        with session_scope(lambda: session):
            raise error

    assert excinfo.value.__cause__ is error
    session.rollback.assert_called_once()
    session.close.assert_called_once()


def test_domain_errors_pass_through_unchanged():
    session = Mock()

    with pytest.raises(NotFoundError):
        with session_scope(lambda: session):
            raise NotFoundError("alert", "a-1")

    session.rollback.assert_called_once()
    assert not session.commit.called


def test_repository_surfaces_unavailable_store():
    def broken_factory():
        session = Mock()
        session.get.side_effect = OperationalError("SELECT", {}, Exception("unable to open"))
        return session

    with pytest.raises(UpstreamUnavailableError):
        AlertRepository(broken_factory).find_by_id("a-1")


@pytest.mark.parametrize("url,expected", [
    ("sqlite:///aiqa.db", "sqlite:///aiqa.db"),
    ("postgresql://user:secret@db:5432/aiqa", "postgresql://***@db:5432/aiqa"),
])
def test_redact_hides_credentials(url, expected):
    assert _redact(url) == expected


def test_get_session_reads_global_database(session_factory):
    with get_session() as session:
        assert session.query(Alert).count() == 0
