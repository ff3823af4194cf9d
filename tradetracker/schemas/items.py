# tradetracker/schemas/items.py
"""
Pydantic schemas for the item catalog and bulk import.
"""

from pydantic import Field, field_validator

from tradetracker.schemas.base import CamelModel
from tradetracker.services.constants import MAX_ITEM_NAME_LENGTH, MAX_MARKET_HASH_NAME_LENGTH


class ItemBase(CamelModel):
    market_hash_name: str = Field(
        ...,
        min_length=1,
        max_length=MAX_MARKET_HASH_NAME_LENGTH,
        description="Marketplace identifier, unique",
        examples=["AK-47 | Redline (Field-Tested)"]
    )
    en_name: str = Field(
        ...,
        max_length=MAX_ITEM_NAME_LENGTH,
        description="English display name",
        examples=["AK-47 | Redline (Field-Tested)"]
    )
    cn_name: str = Field(
        ...,
        max_length=MAX_ITEM_NAME_LENGTH,
        description="Localized display name",
        examples=["AK-47 | 红线 (久经沙场)"]
    )
    name_id: int = Field(
        ...,
        description="Stable numeric item key, unique",
        examples=[1001]
    )

    @field_validator("market_hash_name")
    @classmethod
    def strip_market_hash_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("marketHashName cannot be blank")
        return v


class ItemCreate(ItemBase):
    """Body of POST /api/items."""


class ItemResponse(ItemBase):
    id: int


# =============================================================================
# IMPORT
# =============================================================================

class ItemImportRequest(CamelModel):
    """Body of POST /api/items/import: the catalog document as text."""

    json_data: str = Field(
        ...,
        description="JSON object keyed by market hash name",
        examples=['{"AK-47 | Redline (Field-Tested)": {"en_name": "...", "cn_name": "...", "name_id": 1001}}']
    )


class ItemImportResponse(CamelModel):
    total_items: int
    imported_count: int
    skipped_count: int
    skipped_items: list[str]
