"""Celery task wiring for search history retention."""

from datetime import datetime, timedelta, timezone

import pytest

from blog_search.core.config import settings
from blog_search.models.search_history import SearchHistory
from blog_search.tasks import search_history_cleanup
from blog_search.tasks.celery_app import celery_app, get_beat_schedule


@pytest.fixture
def task_sessions(session_factory, monkeypatch):
    monkeypatch.setattr(search_history_cleanup, "SessionLocal", session_factory)
    return session_factory


def test_beat_schedule_registers_cleanup():
    schedule = get_beat_schedule()

    assert schedule["cleanup-search-history"]["task"] == "cleanup_search_history"
    assert celery_app.conf.beat_schedule == schedule


def test_cleanup_task_purges_expired(db, reader, make_history, task_sessions, monkeypatch):
    monkeypatch.setattr(settings, "search_history_retention_days", 30)
    now = datetime.now(timezone.utc)
    make_history(reader, "fresh", now - timedelta(days=1))
    make_history(reader, "stale", now - timedelta(days=90))

    result = search_history_cleanup.cleanup_search_history()

    assert result["status"] == "success"
    assert result["expired_removed"] == 1
    assert result["stats_before"]["expired_eligible"] == 1
    assert result["stats_after"]["expired_eligible"] == 0
    assert [e.query_text for e in db.query(SearchHistory).all()] == ["fresh"]


def test_dry_run_deletes_nothing(db, reader, make_history, task_sessions, monkeypatch):
    monkeypatch.setattr(settings, "search_history_retention_days", 30)
    make_history(reader, "stale", datetime.now(timezone.utc) - timedelta(days=90))

    result = search_history_cleanup.search_history_cleanup_dry_run()

    assert result["status"] == "dry_run"
    assert result["would_delete"] == 1
    assert db.query(SearchHistory).count() == 1
