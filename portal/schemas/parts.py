from typing import List, Optional
from pydantic import Field

from portal.schemas.base_dto import BaseDTO


class ScannedPart(BaseDTO):
    '''
    One part folder found on the engineering drive.

    Produced fresh on every scan and never persisted in this form.
    exists_in_db stays False until reconciliation has looked it up.
    '''
    apc_pn: str = Field(alias="apcPN")
    folder_name: str = Field(alias="folderName")
    full_path: str = Field(alias="fullPath")

    customer: Optional[str] = None
    customer_pn: Optional[str] = Field(default=None, alias="customerPN")
    current_rev: Optional[str] = Field(default=None, alias="currentRev")

    item_type_id: int = Field(alias="itemTypeId")
    exists_in_db: bool = Field(default=False, alias="existsInDB")


class FieldDiff(BaseDTO):
    field: str
    db_value: Optional[str] = Field(default=None, alias="dbValue")
    folder_value: Optional[str] = Field(default=None, alias="folderValue")
    is_different: bool = Field(alias="isDifferent")


class PartComparison(BaseDTO):
    apc_pn: str = Field(alias="apcPN")
    folder_name: str = Field(alias="folderName")
    full_path: str = Field(alias="fullPath")
    differences: List[FieldDiff] = []
    exists_in_db: bool = Field(alias="existsInDB")
    # catalog id, only set when exists_in_db
    db_id: Optional[int] = Field(default=None, alias="dbId")

    @property
    def differing_fields(self) -> List[str]:
        return [d.field for d in self.differences if d.is_different]


class ExistenceReport(BaseDTO):
    '''Scan result split into parts already catalogued and new ones.'''
    total: int
    new: int
    existing: int
    parts: List[ScannedPart] = []

    @property
    def parts_to_import(self) -> List[ScannedPart]:
        return [p for p in self.parts if not p.exists_in_db]


class DiffReport(BaseDTO):
    '''
    Field-level comparison of scanned folders against the catalog.

    comparisons holds parts with at least one differing field plus parts
    missing from the catalog; in-sync parts are counted in total only.
    '''
    total: int
    mismatches: int
    new_parts: int = Field(alias="newParts")
    comparisons: List[PartComparison] = []
