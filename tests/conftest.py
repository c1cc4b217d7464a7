"""Shared fixtures: a fresh in-memory database and services per test."""

from datetime import datetime

import pytest

import aiqa.utils.database as db_module
from aiqa.ops import (
    create_dashboard_service,
    create_feedback_service,
    create_monitoring_service,
    create_review_service,
)
from aiqa.utils.database import get_session_factory, init_database


@pytest.fixture
def session_factory():
    """Initialize a clean in-memory database and return its session factory."""
    db_module._engine = None
    db_module._session_factory = None

    init_database("sqlite:///:memory:")
    yield get_session_factory()

    db_module._engine.dispose()
    db_module._engine = None
    db_module._session_factory = None


@pytest.fixture
def monitoring_service(session_factory):
    return create_monitoring_service(session_factory)


@pytest.fixture
def feedback_service(session_factory):
    return create_feedback_service(session_factory)


@pytest.fixture
def review_service(session_factory):
    return create_review_service(session_factory)


@pytest.fixture
def dashboard_service(session_factory):
    return create_dashboard_service(session_factory)


@pytest.fixture
def base_time():
    """Fixed reference time for deterministic ordering tests."""
    return datetime(2025, 11, 1, 12, 0, 0)


@pytest.fixture
def healthy_metrics():
    """Metrics snapshot values that breach no threshold."""
    return dict(
        generation_success_rate=0.95,
        average_confidence_score=0.85,
        parent_satisfaction_rating=4.5,
        content_flag_rate=0.02,
        human_review_rate=0.05,
        average_response_time_ms=1200,
        total_generations=1000,
    )
