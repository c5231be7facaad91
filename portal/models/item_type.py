# portal/models/item_type.py
from sqlalchemy import String, Integer, Enum
from sqlalchemy.orm import Mapped, mapped_column

from portal.db.base import Base
from portal.db.enums import ItemTypeCode


class ItemType(Base):
    """
    Lookup table for the part category inferred from the part number.
    """

    __tablename__ = "item_types"

    id :Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    code :Mapped[ItemTypeCode] = mapped_column(
        Enum(ItemTypeCode, values_callable=lambda e: [m.value for m in e]),
        unique=True,
        nullable=False,
        comment="Short code: PIE, CON, T_V, CCA, PCB",
    )

    name :Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<ItemType id={self.id} code={self.code.value} name={self.name}>"
