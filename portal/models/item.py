# portal/models/item.py
from typing import Optional
from sqlalchemy import (
    String,
    Integer,
    DateTime,
    ForeignKey,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime

from portal.db.base import Base
from portal.db.enums import MajorItemType, DEFAULT_ITEM_TYPE_ID


class Item(Base):
    """
    Catalog record for one engineering part or document.

    apcPN is the join key against the engineering job folders; it is not
    declared unique because the legacy catalog already holds duplicates.
    """

    __tablename__ = "items"

    id :Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # =========
    # Identity
    # =========
    apc_pn :Mapped[str] = mapped_column(
        "apcPN",
        String(20),
        nullable=False,
        index=True,
        comment="Canonical 5-digit part number",
    )

    # =========
    # Customer
    # =========
    customer :Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    customer_pn :Mapped[Optional[str]] = mapped_column("customerPN", String(255), nullable=True)

    # =========
    # Revision
    # =========
    build_rev :Mapped[Optional[str]] = mapped_column("buildRev", String(50), nullable=True)
    current_rev :Mapped[Optional[str]] = mapped_column("currentRev", String(50), nullable=True)

    description :Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    full_path :Mapped[Optional[str]] = mapped_column(
        "fullPath",
        String(1024),
        nullable=True,
        comment="Absolute path of the engineering job folder",
    )

    # =========
    # Classification
    # =========
    m_item_type_id :Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=int(MajorItemType.part),
        comment="1=part, 2=doc",
    )
    item_type_id :Mapped[int] = mapped_column(
        Integer,
        ForeignKey("item_types.id"),
        nullable=False,
        default=DEFAULT_ITEM_TYPE_ID,
        comment="1=PIE, 2=CON, 3=T_V, 4=CCA, 5=PCB",
    )

    created_at :Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    item_type = relationship("ItemType", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<Item id={self.id} "
            f"apcPN={self.apc_pn} "
            f"customer={self.customer} "
            f"rev={self.current_rev}>"
        )
