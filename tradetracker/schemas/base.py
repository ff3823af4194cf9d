# tradetracker/schemas/base.py
"""
Shared Pydantic base for API schemas.

The wire format is camelCase (nameId, unitPrice, manualValue) while Python
code stays snake_case. Aliases are generated, population by field name is
allowed, and responses are built straight from ORM rows or dataclasses.

Decimal fields serialize as JSON strings, so money never passes through
a float on the way out.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
