# portal/db/enums.py
import enum


# Item related enums
class MajorItemType(enum.IntEnum):
    """Stored in items.m_item_type_id."""
    part = 1
    doc = 2


class ItemTypeCode(enum.Enum):
    PIECE_PART = "PIE"
    CONNECTOR = "CON"
    TEST_VEHICLE = "T_V"
    CIRCUIT_CARD_ASSEMBLY = "CCA"
    PRINTED_CIRCUIT_BOARD = "PCB"


# item_types seed rows: id -> (code, display name)
ITEM_TYPES = {
    1: (ItemTypeCode.PIECE_PART, "Piece Part"),
    2: (ItemTypeCode.CONNECTOR, "Connector"),
    3: (ItemTypeCode.TEST_VEHICLE, "Test Vehicle"),
    4: (ItemTypeCode.CIRCUIT_CARD_ASSEMBLY, "Circuit Card Assembly"),
    5: (ItemTypeCode.PRINTED_CIRCUIT_BOARD, "Printed Circuit Board"),
}

DEFAULT_ITEM_TYPE_ID = 1


# Reconciliation
class ReconciledField(enum.Enum):
    """Fields compared between a part folder and its catalog row, in report order."""
    customer = "customer"
    customer_pn = "customerPN"
    current_rev = "currentRev"
    full_path = "fullPath"
