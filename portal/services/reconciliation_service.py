# portal/services/reconciliation_service.py
from typing import Dict, List, Sequence

from portal.db.enums import ReconciledField
from portal.logger import get_logger
from portal.models.item import Item
from portal.schemas.parts import (
    DiffReport,
    ExistenceReport,
    FieldDiff,
    PartComparison,
    ScannedPart,
)
from portal.schemas.write_back import ImportPart, SyncUpdate
from portal.services.catalog_service import CatalogService

logger = get_logger(__name__)

# ReconciledField -> attribute name on both ScannedPart and Item
_ATTRIBUTES = {
    ReconciledField.customer: "customer",
    ReconciledField.customer_pn: "customer_pn",
    ReconciledField.current_rev: "current_rev",
    ReconciledField.full_path: "full_path",
}


class ReconciliationService:
    """
    Diffs scanned part folders against the catalog, keyed by apcPN.

    Responsibilities:
    - existence mode: which scanned parts are new / already catalogued
    - field-diff mode: which catalogued parts disagree with their folder
    - turning either report into an import or sync plan

    Read-only: it never writes to the catalog. Catalog errors propagate.
    """

    def __init__(self, catalog: CatalogService):
        self.catalog = catalog

    # ======================================================
    # Existence mode
    # ======================================================

    def existence_report(self, scanned: Sequence[ScannedPart]) -> ExistenceReport:
        '''
        Mark every scanned part with exists_in_db, using one batched lookup.

        :param scanned: output of PartScanner; exists_in_db is overwritten in place
        :type scanned: Sequence[ScannedPart]
        '''
        found = self.catalog.find_by_part_numbers(p.apc_pn for p in scanned)
        existing_pns = {item.apc_pn for item in found}

        for part in scanned:
            part.exists_in_db = part.apc_pn in existing_pns

        existing = sum(1 for p in scanned if p.exists_in_db)
        report = ExistenceReport(
            total=len(scanned),
            new=len(scanned) - existing,
            existing=existing,
            parts=list(scanned),
        )
        logger.info(f"Existence check: {report.new} new, {report.existing} existing of {report.total}")
        return report

    def build_import_plan(self, report: ExistenceReport) -> List[ImportPart]:
        return [
            ImportPart(
                apc_pn=p.apc_pn,
                full_path=p.full_path,
                customer=p.customer,
                customer_pn=p.customer_pn,
                current_rev=p.current_rev,
                item_type_id=p.item_type_id,
            )
            for p in report.parts_to_import
        ]

    # ======================================================
    # Field-diff mode
    # ======================================================

    def diff_report(self, scanned: Sequence[ScannedPart]) -> DiffReport:
        snapshot = self._snapshot_by_part_number(self.catalog.get_all_parts())

        comparisons: List[PartComparison] = []
        for part in scanned:
            item = snapshot.get(part.apc_pn)

            if item is None:
                part.exists_in_db = False
                comparisons.append(PartComparison(
                    apc_pn=part.apc_pn,
                    folder_name=part.folder_name,
                    full_path=part.full_path,
                    differences=[],
                    exists_in_db=False,
                ))
                continue

            part.exists_in_db = True
            differences = compare_fields(item, part)
            if any(d.is_different for d in differences):
                comparisons.append(PartComparison(
                    apc_pn=part.apc_pn,
                    folder_name=part.folder_name,
                    full_path=part.full_path,
                    differences=differences,
                    exists_in_db=True,
                    db_id=item.id,
                ))

        mismatches = sum(1 for c in comparisons if c.exists_in_db)
        report = DiffReport(
            total=len(scanned),
            mismatches=mismatches,
            new_parts=len(comparisons) - mismatches,
            comparisons=comparisons,
        )
        logger.info(
            f"Field diff: {report.mismatches} mismatched, {report.new_parts} new, "
            f"{report.total - report.mismatches - report.new_parts} in sync"
        )
        return report

    def build_sync_plan(self, report: DiffReport) -> List[SyncUpdate]:
        updates = []
        for comparison in report.comparisons:
            if not comparison.exists_in_db:
                continue
            folder_values = {d.field: d.folder_value for d in comparison.differences}
            updates.append(SyncUpdate(
                db_id=comparison.db_id,
                apc_pn=comparison.apc_pn,
                customer=folder_values.get(ReconciledField.customer.value),
                customer_pn=folder_values.get(ReconciledField.customer_pn.value),
                current_rev=folder_values.get(ReconciledField.current_rev.value),
                full_path=folder_values.get(ReconciledField.full_path.value),
            ))
        return updates

    @staticmethod
    def _snapshot_by_part_number(items: Sequence[Item]) -> Dict[str, Item]:
        # items arrive ordered by id; the oldest row wins on duplicate apcPN
        snapshot: Dict[str, Item] = {}
        for item in items:
            snapshot.setdefault(item.apc_pn, item)
        return snapshot


def compare_fields(item: Item, part: ScannedPart) -> List[FieldDiff]:
    """
    Strict pairwise comparison: None and "" are different values.
    """
    differences = []
    for field, attribute in _ATTRIBUTES.items():
        db_value = getattr(item, attribute)
        folder_value = getattr(part, attribute)
        differences.append(FieldDiff(
            field=field.value,
            db_value=db_value,
            folder_value=folder_value,
            is_different=db_value != folder_value,
        ))
    return differences
