"""
Shared pydantic base classes for records and analytics output.
"""
from datetime import date, datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """
    Base model that reads and writes camelCase field names.

    Records arrive from the storage collaborator in camelCase
    (``startDate``, ``createdAt``); attribute access stays snake_case.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True
    )

    def to_dict(self) -> dict:
        """Dump to a plain dict keyed by camelCase names."""
        return self.model_dump(by_alias=True)

def normalize_instant(value: Any) -> Any:
    """
    Coerce calendar dates and aware datetimes to naive UTC datetimes.

    Day arithmetic compares instants, so every timestamp handled by the
    analytics code must share one representation.

    Example:
        >>> normalize_instant(date(2024, 1, 1))
        datetime.datetime(2024, 1, 1, 0, 0)
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return value
