import os
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional

from portal.importers.folder_name import (
    is_part_folder,
    is_range_folder,
    item_type_from_part_number,
    parse_folder_name,
)
from portal.logger import get_logger
from portal.schemas.parts import ScannedPart

logger = get_logger(__name__)


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    is_dir: bool


class DirectoryLister(ABC):
    """
    Contract for reading one directory level.
    Read failures must raise OSError naming the offending path.
    """
    @abstractmethod
    def list_entries(self, path: str) -> List[DirectoryEntry]:
        pass


class LocalDirectoryLister(DirectoryLister):
    """os.scandir over a mounted share."""

    def list_entries(self, path: str) -> List[DirectoryEntry]:
        with os.scandir(path) as it:
            return [
                DirectoryEntry(name=entry.name, is_dir=entry.is_dir())
                for entry in it
            ]


class PartScanner:
    """
    Walks the engineering job drive: ``<root>/<range folder>/<part folder>``.

    Only two levels are read. The root must be readable, otherwise the scan
    fails. A range folder that cannot be read is logged and contributes no
    parts; the other ranges are still scanned.
    """

    def __init__(
        self,
        root: str,
        lister: Optional[DirectoryLister] = None,
        max_workers: int = 1,
    ):
        self.root = root
        self.lister = lister or LocalDirectoryLister()
        self.max_workers = max(1, max_workers)

    # ======================================================
    # Range folders
    # ======================================================

    def list_range_folders(self) -> List[str]:
        """Sorted range folder names under the root. Root errors propagate."""
        try:
            entries = self.lister.list_entries(self.root)
        except OSError as e:
            logger.error(f"Cannot read parts root {self.root}: {e}")
            raise

        return sorted(
            entry.name for entry in entries
            if entry.is_dir and is_range_folder(entry.name)
        )

    # ======================================================
    # Scans
    # ======================================================

    def scan(self, ranges: Optional[Iterable[str]] = None) -> List[ScannedPart]:
        if ranges is None:
            return self.scan_all()
        return self.scan_ranges(ranges)

    def scan_all(self) -> List[ScannedPart]:
        '''Scan every range folder under the root.'''
        return self._scan_range_folders(self.list_range_folders())

    def scan_ranges(self, ranges: Iterable[str]) -> List[ScannedPart]:
        '''
        Scan an operator-chosen subset of range folders.

        :param ranges: range folder names, e.g. ["12700-12799"]; names that are not range folders are skipped
        :type ranges: Iterable[str]
        '''
        selected = []
        for name in ranges:
            name = name.strip()
            if not is_range_folder(name):
                logger.warning(f"Ignoring '{name}': not a range folder name")
                continue
            if name not in selected:
                selected.append(name)
        return self._scan_range_folders(selected)

    def _scan_range_folders(self, range_names: List[str]) -> List[ScannedPart]:
        if self.max_workers > 1 and len(range_names) > 1:
            # map() yields in submission order, so the result stays deterministic
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                per_range = list(executor.map(self.scan_range_folder, range_names))
        else:
            per_range = [self.scan_range_folder(name) for name in range_names]

        parts = [part for chunk in per_range for part in chunk]
        logger.info(f"Scanned {len(parts)} parts from {len(range_names)} range folders under {self.root}")
        return parts

    def scan_range_folder(self, range_name: str) -> List[ScannedPart]:
        """Parts in one range folder; an unreadable folder yields []."""
        range_path = os.path.join(self.root, range_name)
        try:
            entries = self.lister.list_entries(range_path)
        except OSError as e:
            logger.error(f"Error scanning range folder {range_path}: {e}")
            return []

        parts = []
        for entry in sorted(entries, key=lambda e: e.name):
            if not (entry.is_dir and is_part_folder(entry.name)):
                continue
            parts.append(self._to_scanned_part(range_path, entry.name))
        return parts

    @staticmethod
    def _to_scanned_part(range_path: str, folder_name: str) -> ScannedPart:
        parsed = parse_folder_name(folder_name)
        return ScannedPart(
            apc_pn=parsed.apc_pn,
            folder_name=folder_name,
            full_path=os.path.join(range_path, folder_name),
            customer=parsed.customer,
            customer_pn=parsed.customer_pn,
            current_rev=parsed.current_rev,
            item_type_id=item_type_from_part_number(parsed.apc_pn),
            exists_in_db=False,
        )
