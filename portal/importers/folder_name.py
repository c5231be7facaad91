"""
Folder-name parsing for engineering job folders.

Part folders are named free-hand by engineers, e.g.::

    12747 Harris 8026565-1
    12710 BAE 1050468-0001 Rev E-A

The part number is always the first five characters; everything after it is
split heuristically into customer, customer part number and revision.
Parsing never fails: an ambiguous name yields a best guess, not an error.
"""
import re
from dataclasses import dataclass
from typing import Optional

from portal.db.enums import DEFAULT_ITEM_TYPE_ID

PART_NUMBER_LENGTH = 5

RANGE_FOLDER_RE = re.compile(r"^[0-9]{5}-[0-9]{5}\Z")
PART_FOLDER_RE = re.compile(r"^[0-9]{5}(\s|\Z)")
REV_RE = re.compile(r"\bRev\s+([A-Za-z0-9-]+)", re.IGNORECASE)
PART_NUMBER_HINT_RE = re.compile(r"[0-9-]")

# leading digit of the part number -> item_types.id
ITEM_TYPE_BY_LEADING_DIGIT = {
    "0": 3,  # Test Vehicle
    "1": 4,  # Circuit Card Assembly
    "3": 2,  # Connector
    "7": 5,  # Printed Circuit Board
    "9": 1,  # Piece Part
}


@dataclass(frozen=True)
class ParsedFolderName:
    apc_pn: str
    customer: Optional[str] = None
    customer_pn: Optional[str] = None
    current_rev: Optional[str] = None


def is_range_folder(name: str) -> bool:
    """``NNNNN-NNNNN``, e.g. ``12700-12799``."""
    return RANGE_FOLDER_RE.match(name) is not None


def is_part_folder(name: str) -> bool:
    """Exactly five leading digits followed by whitespace or nothing."""
    return PART_FOLDER_RE.match(name) is not None


def parse_folder_name(folder_name: str) -> ParsedFolderName:
    '''
    Split a part folder name into its catalog fields.

    :param folder_name: directory entry name, already known to match the part folder pattern
    :type folder_name: str
    :return: apc_pn always set; the other fields only when found
    :rtype: ParsedFolderName
    '''
    apc_pn = folder_name[:PART_NUMBER_LENGTH]
    remaining = folder_name[PART_NUMBER_LENGTH:].strip()

    if not remaining:
        return ParsedFolderName(apc_pn=apc_pn)

    # 1. revision token, removed before splitting the rest
    current_rev = None
    rev_match = REV_RE.search(remaining)
    if rev_match:
        current_rev = rev_match.group(1)
        remaining = (remaining[:rev_match.start()] + remaining[rev_match.end():]).strip()

    # 2. customer / customer part number
    tokens = remaining.split()

    if not tokens:
        return ParsedFolderName(apc_pn=apc_pn, current_rev=current_rev)

    if len(tokens) == 1:
        # a lone token with digits or dashes reads as a part number, anything else as a name
        if PART_NUMBER_HINT_RE.search(tokens[0]):
            return ParsedFolderName(apc_pn=apc_pn, customer_pn=tokens[0], current_rev=current_rev)
        return ParsedFolderName(apc_pn=apc_pn, customer=tokens[0], current_rev=current_rev)

    return ParsedFolderName(
        apc_pn=apc_pn,
        customer=tokens[0],
        customer_pn=" ".join(tokens[1:]),
        current_rev=current_rev,
    )


def item_type_from_part_number(apc_pn: str) -> int:
    '''
    Infer item_types.id from the leading digit of the part number.

    Digits without a mapping (2, 4, 5, 6, 8) fall back to Piece Part.
    This is lossy on purpose; it never raises.
    '''
    return ITEM_TYPE_BY_LEADING_DIGIT.get(apc_pn[:1], DEFAULT_ITEM_TYPE_ID)
