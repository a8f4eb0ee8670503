"""Column types for on-chain quantities."""

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import NUMERIC
from sqlalchemy.types import TypeDecorator


class Uint256(TypeDecorator):
    """Exact uint256 storage.

    PostgreSQL gets NUMERIC(78, 0). SQLite has no integer wider than 64 bits,
    so other dialects store the decimal text. Values always come back as int.
    """

    impl = String(78)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(NUMERIC(precision=78, scale=0))
        return dialect.type_descriptor(String(78))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return int(value)
        return str(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
