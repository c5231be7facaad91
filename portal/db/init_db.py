"""
Table bootstrap for the catalog database.
Creates missing tables and seeds the item_types lookup rows.
"""
from sqlalchemy import inspect

from portal.db.base import Base
from portal.db.enums import ITEM_TYPES
from portal.db.session import Database
from portal.logger import get_logger
# ------------------- register all tables -----------------------
from portal.models.item import Item  # noqa: F401
from portal.models.item_type import ItemType

logger = get_logger(__name__)


def check_tables_exist(database: Database) -> bool:
    """Return True when both catalog tables are present."""
    tables = inspect(database.engine).get_table_names()
    return "items" in tables and "item_types" in tables


def seed_item_types(database: Database) -> int:
    """Insert any missing item_types rows; returns how many were added."""
    added = 0
    with database.session_scope() as db:
        existing = {row.id for row in db.query(ItemType).all()}
        for type_id, (code, name) in ITEM_TYPES.items():
            if type_id in existing:
                continue
            db.add(ItemType(id=type_id, code=code, name=name))
            added += 1
    return added


def init_db(database: Database) -> None:
    if not check_tables_exist(database):
        logger.info("Catalog tables missing, creating...")
        Base.metadata.create_all(bind=database.engine)
    added = seed_item_types(database)
    if added:
        logger.info(f"Seeded {added} item types")
