"""Celery tasks for periodic maintenance."""
