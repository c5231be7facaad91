# portal/services/catalog_service.py
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from portal.db.enums import MajorItemType, DEFAULT_ITEM_TYPE_ID
from portal.models.item import Item


class CatalogService:
    """
    Read / write access to the parts catalog (``items`` table).

    Provides:
    - batched lookup by part number
    - full part snapshot
    - insert / whitelisted update (folder sync and manual edit)
    - product listing

    Never commits; the caller owns the transaction.
    """

    # fields a folder sync is allowed to overwrite
    SYNC_FIELDS = {"customer", "customer_pn", "current_rev", "full_path"}
    # fields the product edit form may change
    EDITABLE_FIELDS = SYNC_FIELDS | {"description"}

    def __init__(self, db: Session):
        self.db = db

    def _parts_query(self):
        return (
            self.db.query(Item)
            .filter(Item.m_item_type_id == int(MajorItemType.part))
        )

    # ======================================================
    # Reads
    # ======================================================

    def find_by_part_numbers(self, part_numbers: Iterable[str]) -> List[Item]:
        '''
        Catalog parts whose apcPN is in part_numbers, in one IN query.

        :param part_numbers: apcPNs to look up; duplicates are collapsed
        :type part_numbers: Iterable[str]
        '''
        unique = sorted(set(part_numbers))
        if not unique:
            return []
        return (
            self._parts_query()
            .filter(Item.apc_pn.in_(unique))
            .order_by(Item.id)
            .all()
        )

    def get_all_parts(self) -> List[Item]:
        return self._parts_query().order_by(Item.id).all()

    def exists(self, apc_pn: str) -> bool:
        return (
            self.db.query(Item.id)
            .filter(Item.apc_pn == apc_pn)
            .first()
        ) is not None

    def get_item(self, item_id: int) -> Optional[Item]:
        return self.db.get(Item, item_id)

    def list_products(self) -> List[Item]:
        return self._parts_query().order_by(Item.apc_pn).all()

    # ======================================================
    # Writes
    # ======================================================

    def insert(
        self,
        *,
        apc_pn: str,
        full_path: Optional[str],
        customer: Optional[str] = None,
        customer_pn: Optional[str] = None,
        current_rev: Optional[str] = None,
        description: Optional[str] = None,
        item_type_id: int = DEFAULT_ITEM_TYPE_ID,
        m_item_type_id: int = int(MajorItemType.part),
    ) -> Item:
        item = Item(
            apc_pn=apc_pn,
            customer=customer or None,
            customer_pn=customer_pn or None,
            current_rev=current_rev or None,
            description=description,
            full_path=full_path,
            m_item_type_id=m_item_type_id,
            item_type_id=item_type_id,
        )
        self.db.add(item)
        self.db.flush()
        return item

    def update(self, item_id: int, fields: Dict[str, Any]) -> Item:
        '''
        Overwrite whitelisted fields of one catalog row.

        :param item_id: items.id
        :type item_id: int
        :param fields: attribute name -> new value; only SYNC_FIELDS are accepted
        :type fields: Dict[str, Any]
        '''
        return self._apply(item_id, fields, self.SYNC_FIELDS)

    def edit(self, item_id: int, fields: Dict[str, Any]) -> Item:
        '''
        Manual product edit: like update, but description is editable too
        and empty strings are stored as NULL.
        '''
        cleaned = {field: (value or None) for field, value in fields.items()}
        return self._apply(item_id, cleaned, self.EDITABLE_FIELDS)

    def _apply(self, item_id: int, fields: Dict[str, Any], allowed) -> Item:
        item = self.get_item(item_id)
        if not item:
            raise ValueError(f"Item not found: {item_id}")

        for field, value in fields.items():
            if field not in allowed:
                raise ValueError(f"Field '{field}' is not editable")
            setattr(item, field, value)

        self.db.flush()
        return item
