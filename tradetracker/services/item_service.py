# tradetracker/services/item_service.py
"""
Item catalog service.

This service handles:
- Listing and creating catalog items
- Keyword search for the trade entry form
- Bulk import of the catalog document

Design Principles:
- No HTTP Knowledge: Raises domain exceptions, not HTTPException
- Receives the database session per call
- An import is all-or-nothing: validated fully, committed once

Usage:
    from tradetracker.services.item_service import ItemService

    service = ItemService()
    items = service.search_items(db, keyword="redline", limit=15)
    result = service.import_items(db, content=json_text)
"""

from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tradetracker.config import settings
from tradetracker.models import Item
from tradetracker.services.exceptions import ItemExistsError, ItemNotFoundError
from tradetracker.services.item_import import ImportResult, parse_import_document
from tradetracker.utils.sql import LIKE_ESCAPE_CHAR, contains_pattern

logger = logging.getLogger(__name__)


class ItemService:
    """
    Catalog queries and writes.

    Example:
        service = ItemService()
        item = service.create_item(
            db,
            market_hash_name="AWP | Asiimov (Field-Tested)",
            en_name="AWP | Asiimov (Field-Tested)",
            cn_name="AWP | 二西莫夫 (久经沙场)",
            name_id=2002,
        )
    """

    def __init__(self) -> None:
        logger.info("ItemService initialized")

    # =========================================================================
    # QUERIES
    # =========================================================================

    def list_items(self, db: Session) -> list[Item]:
        """All items ordered by nameId."""
        return list(db.scalars(select(Item).order_by(Item.name_id)).all())

    def get_item(self, db: Session, name_id: int) -> Item:
        """
        Raises:
            ItemNotFoundError: If no item has this nameId
        """
        item = db.scalar(select(Item).where(Item.name_id == name_id))
        if item is None:
            raise ItemNotFoundError(name_id)
        return item

    def search_items(self, db: Session, keyword: str | None, limit: int | None = None) -> list[Item]:
        """
        Case-insensitive substring search over the market hash name and both
        display names. A purely numeric keyword also matches nameId exactly.

        Args:
            keyword: Search text; blank returns the first items by name
            limit: Page size, defaults to SEARCH_DEFAULT_LIMIT and is capped
                   at SEARCH_MAX_LIMIT

        Returns:
            Matching items ordered by market hash name
        """
        if limit is None or limit <= 0:
            limit = settings.search_default_limit
        limit = min(limit, settings.search_max_limit)

        query = select(Item)
        keyword = (keyword or "").strip()
        if keyword:
            pattern = contains_pattern(keyword)
            conditions = [
                Item.market_hash_name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                Item.en_name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                Item.cn_name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            ]
            if keyword.isdigit():
                conditions.append(Item.name_id == int(keyword))
            query = query.where(or_(*conditions))

        items = list(db.scalars(query.order_by(Item.market_hash_name).limit(limit)).all())
        logger.debug(f"Item search '{keyword}' (limit {limit}) returned {len(items)} items")
        return items

    # =========================================================================
    # WRITES
    # =========================================================================

    def create_item(
            self,
            db: Session,
            market_hash_name: str,
            en_name: str,
            cn_name: str,
            name_id: int,
    ) -> Item:
        """
        Add one item to the catalog.

        Raises:
            ItemExistsError: If the marketHashName or the nameId is taken
        """
        existing = db.scalar(
            select(Item.id).where(
                or_(Item.market_hash_name == market_hash_name, Item.name_id == name_id)
            )
        )
        if existing is not None:
            raise ItemExistsError(market_hash_name, name_id)

        item = Item(
            market_hash_name=market_hash_name,
            en_name=en_name,
            cn_name=cn_name,
            name_id=name_id,
        )
        db.add(item)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race against a concurrent insert of the same item
            db.rollback()
            raise ItemExistsError(market_hash_name, name_id)
        db.refresh(item)

        logger.info(f"Created item {name_id} '{market_hash_name}'")
        return item

    def import_items(self, db: Session, content: str | bytes) -> ImportResult:
        """
        Bulk import a catalog document.

        Entries whose market hash name or nameId already exists, in the
        database or earlier in the same document, are skipped.

        Raises:
            FormatError: If the document is malformed (nothing is written)
        """
        entries = parse_import_document(content)
        result = ImportResult(total_items=len(entries))

        known_names = set(db.scalars(select(Item.market_hash_name)).all())
        known_ids = set(db.scalars(select(Item.name_id)).all())

        for entry in entries:
            if entry.market_hash_name in known_names or entry.name_id in known_ids:
                result.skipped_items.append(entry.market_hash_name)
                continue
            db.add(Item(
                market_hash_name=entry.market_hash_name,
                en_name=entry.en_name,
                cn_name=entry.cn_name,
                name_id=entry.name_id,
            ))
            known_names.add(entry.market_hash_name)
            known_ids.add(entry.name_id)
            result.imported_count += 1

        result.skipped_count = len(result.skipped_items)

        try:
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Item import failed, rolled back")
            raise

        logger.info(
            f"Item import finished: total={result.total_items}, "
            f"imported={result.imported_count}, skipped={result.skipped_count}"
        )
        return result
