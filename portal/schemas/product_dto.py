from typing import Optional
from datetime import datetime
from pydantic import Field

from portal.models.item import Item
from portal.schemas.base_dto import BaseDTO


class ProductDTO(BaseDTO):
    id: int
    apc_pn: str = Field(alias="apcPN")
    customer: Optional[str] = None
    customer_pn: Optional[str] = Field(default=None, alias="customerPN")
    build_rev: Optional[str] = Field(default=None, alias="buildRev")
    current_rev: Optional[str] = Field(default=None, alias="currentRev")
    description: Optional[str] = None
    full_path: Optional[str] = Field(default=None, alias="fullPath")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    m_item_type_id: int
    item_type_id: int
    item_type_name: Optional[str] = None
    item_type_code: Optional[str] = None

    @classmethod
    def from_orm_model(cls, item: Item) -> "ProductDTO":
        return cls(
            id=item.id,
            apc_pn=item.apc_pn,
            customer=item.customer,
            customer_pn=item.customer_pn,
            build_rev=item.build_rev,
            current_rev=item.current_rev,
            description=item.description,
            full_path=item.full_path,
            created_at=item.created_at,
            m_item_type_id=item.m_item_type_id,
            item_type_id=item.item_type_id,
            item_type_name=item.item_type.name if item.item_type else None,
            item_type_code=item.item_type.code.value if item.item_type else None,
        )


class ProductUpdate(BaseDTO):
    '''
    Edit form payload. Every field is written; a missing or empty value
    clears the column.
    '''
    customer: Optional[str] = None
    customer_pn: Optional[str] = Field(default=None, alias="customerPN")
    current_rev: Optional[str] = Field(default=None, alias="currentRev")
    description: Optional[str] = None
    full_path: Optional[str] = Field(default=None, alias="fullPath")
