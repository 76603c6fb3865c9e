"""Throttled submission core: domain models, ports and services."""

from .services.submission_client import SubmissionClient

__all__ = ["SubmissionClient"]
