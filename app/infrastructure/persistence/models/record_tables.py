"""SQLAlchemy Core tables for the record store, one per table schema.

Each table keeps insertion order in an autoincrement _row key and one
nullable JSON column per header, so cells keep their type (numbers stay
numbers) the way spreadsheet cells do.
"""

from collections.abc import Mapping, Sequence

from sqlalchemy import JSON, Column, Integer, MetaData, Table

from app.core.constants import TABLE_SCHEMAS

ROW_KEY = "_row"


def build_metadata(
    schemas: Mapping[str, Sequence[str]] = TABLE_SCHEMAS,
) -> MetaData:
    """Return a MetaData holding one Table per schema entry."""
    metadata = MetaData()
    for name, headers in schemas.items():
        Table(
            name,
            metadata,
            Column(ROW_KEY, Integer, primary_key=True, autoincrement=True),
            *(Column(header, JSON(none_as_null=True), nullable=True) for header in headers),
        )
    return metadata
