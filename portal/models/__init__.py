from portal.models.item import Item
from portal.models.item_type import ItemType

__all__ = ["Item", "ItemType"]
