from typing import List, Optional
from pydantic import Field

from portal.schemas.base_dto import BaseDTO


class ImportPart(BaseDTO):
    '''
    One record of an import batch. Usually a ScannedPart echoed back by the
    admin UI, so unknown keys (folderName, existsInDB, ...) are ignored.
    item_type_id is inferred from the part number when missing.
    '''
    apc_pn: str = Field(alias="apcPN")
    full_path: str = Field(alias="fullPath")
    customer: Optional[str] = None
    customer_pn: Optional[str] = Field(default=None, alias="customerPN")
    current_rev: Optional[str] = Field(default=None, alias="currentRev")
    item_type_id: Optional[int] = Field(default=None, alias="itemTypeId")


class ImportRequest(BaseDTO):
    parts: List[ImportPart]


class ImportResult(BaseDTO):
    imported: int = 0
    skipped: int = 0
    errors: List[str] = []


class SyncUpdate(BaseDTO):
    '''Folder-side values to write onto catalog row db_id.'''
    db_id: int = Field(alias="dbId")
    apc_pn: str = Field(alias="apcPN")
    customer: Optional[str] = None
    customer_pn: Optional[str] = Field(default=None, alias="customerPN")
    current_rev: Optional[str] = Field(default=None, alias="currentRev")
    full_path: Optional[str] = Field(default=None, alias="fullPath")


class SyncRequest(BaseDTO):
    updates: List[SyncUpdate]


class SyncResult(BaseDTO):
    updated: int = 0
    errors: List[str] = []
