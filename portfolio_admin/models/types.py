"""Column types that use native PostgreSQL containers in production and
plain JSON everywhere else (SQLite in the test suite)."""

from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy import JSON, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.types import TypeDecorator


class StringArray(TypeDecorator):
    """``list[str]``: TEXT[] on PostgreSQL, a JSON array elsewhere."""

    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        native = ARRAY(Text) if dialect.name == "postgresql" else JSON()
        return dialect.type_descriptor(native)

    def process_bind_param(self, value: Optional[Any], dialect) -> Optional[List[str]]:
        # tuples and other iterables are stored as plain lists
        return None if value is None else [str(v) for v in value]

    def process_result_value(self, value: Optional[Any], dialect) -> Optional[List[str]]:
        if value is None:
            return None
        return list(value) if isinstance(value, (list, tuple)) else []


class JSONBCompat(TypeDecorator):
    """Dicts and lists: JSONB on PostgreSQL, JSON elsewhere."""

    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        return dialect.type_descriptor(JSONB() if dialect.name == "postgresql" else JSON())
