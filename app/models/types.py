"""
Column types converting between UTC datetimes and the stored date encodings
"""

import uuid

from sqlalchemy import BigInteger, String
from sqlalchemy.types import TypeDecorator

from app.utils.dates import from_epoch_ms, from_iso, to_epoch_ms, to_iso


class EpochMillis(TypeDecorator):
    """Datetime stored as Unix milliseconds (events table)"""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return to_epoch_ms(value)

    def process_result_value(self, value, dialect):
        return from_epoch_ms(value)


class IsoTimestamp(TypeDecorator):
    """Datetime stored as yyyy-MM-ddTHH:mm:ss.fffZ text"""

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return to_iso(value)

    def process_result_value(self, value, dialect):
        return from_iso(value)


def new_id() -> str:
    return str(uuid.uuid4())
