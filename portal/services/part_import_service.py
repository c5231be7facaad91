# portal/services/part_import_service.py
from typing import Callable, Iterable, Optional, TypeVar

from sqlalchemy.orm import Session

from portal.importers.folder_name import item_type_from_part_number
from portal.logger import get_logger
from portal.schemas.write_back import ImportPart, ImportResult, SyncResult, SyncUpdate
from portal.services.catalog_service import CatalogService

logger = get_logger(__name__)

R = TypeVar("R")

# per-record outcomes
IMPORTED = "imported"
SKIPPED = "skipped"


class PartImportService:
    """
    Writes reconciliation plans back to the catalog.

    Every record is applied inside its own SAVEPOINT. A failing record is
    rolled back to that savepoint and reported as "<apcPN>: <message>";
    the rest of the batch carries on. Committing is left to the caller.
    """

    def __init__(self, db: Session, catalog: CatalogService):
        self.db = db
        self.catalog = catalog

    def _apply(self, apc_pn: str, operation: Callable[[], R], errors: list) -> Optional[R]:
        '''
        Run one record's write in a savepoint; on failure append to errors and return None.
        '''
        try:
            with self.db.begin_nested():
                return operation()
        except Exception as e:
            message = f"{apc_pn}: {e}"
            logger.error(f"Write-back failed for {message}")
            errors.append(message)
            return None

    # ======================================================
    # Import
    # ======================================================

    def import_parts(self, parts: Iterable[ImportPart]) -> ImportResult:
        '''
        Insert parts whose apcPN is not catalogued yet.

        :param parts: new parts, usually ReconciliationService.build_import_plan output
        :type parts: Iterable[ImportPart]
        :return: imported / skipped counts and per-record errors
        :rtype: ImportResult
        '''
        result = ImportResult()

        for part in parts:
            outcome = self._apply(part.apc_pn, lambda: self._import_one(part), result.errors)
            if outcome == IMPORTED:
                result.imported += 1
            elif outcome == SKIPPED:
                result.skipped += 1

        logger.info(
            f"Import complete. Imported: {result.imported} "
            f"Skipped: {result.skipped} Errors: {len(result.errors)}"
        )
        return result

    def _import_one(self, part: ImportPart) -> str:
        # an earlier record of the same batch counts as existing
        if self.catalog.exists(part.apc_pn):
            logger.info(f"Skipping existing part: {part.apc_pn}")
            return SKIPPED

        self.catalog.insert(
            apc_pn=part.apc_pn,
            full_path=part.full_path,
            customer=part.customer,
            customer_pn=part.customer_pn,
            current_rev=part.current_rev,
            description=None,
            item_type_id=(
                part.item_type_id
                if part.item_type_id is not None
                else item_type_from_part_number(part.apc_pn)
            ),
        )
        return IMPORTED

    # ======================================================
    # Sync
    # ======================================================

    def sync_parts(self, updates: Iterable[SyncUpdate]) -> SyncResult:
        result = SyncResult()

        for update in updates:
            item = self._apply(update.apc_pn, lambda: self._sync_one(update), result.errors)
            if item is not None:
                result.updated += 1

        logger.info(f"Sync complete. Updated: {result.updated} Errors: {len(result.errors)}")
        return result

    def _sync_one(self, update: SyncUpdate):
        return self.catalog.update(
            update.db_id,
            {
                "customer": update.customer,
                "customer_pn": update.customer_pn,
                "current_rev": update.current_rev,
                "full_path": update.full_path,
            },
        )
