"""
Shared pydantic configuration for engine records and results.

Field names are snake_case in Python; the registry UI speaks camelCase,
so every model carries a camelCase alias. Inputs accept either form and
results dump to the UI's keys with ``model_dump(by_alias=True)``.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base for registry records: camelCase aliases, immutable once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ResultModel(BaseModel):
    """Base for computed results: camelCase aliases on dump."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
