"""FastAPI dependency injection."""

from __future__ import annotations

from charttrace.config import Settings, settings
from charttrace.session import DocumentSession, get_session


def get_settings() -> Settings:
    return settings


def get_document_session() -> DocumentSession:
    return get_session()
