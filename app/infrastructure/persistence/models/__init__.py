"""Persistence models: Core tables for the record store."""

from app.infrastructure.persistence.models.record_tables import ROW_KEY, build_metadata

__all__ = ["ROW_KEY", "build_metadata"]
