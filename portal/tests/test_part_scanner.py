import os

import pytest

from portal.importers.part_scanner import LocalDirectoryLister, PartScanner
from portal.tests.factories import make_dirs


class FlakyLister(LocalDirectoryLister):
    """Local lister that refuses to read the given directory names."""

    def __init__(self, denied):
        self.denied = set(denied)

    def list_entries(self, path):
        if os.path.basename(path) in self.denied:
            raise PermissionError(13, "Permission denied", path)
        return super().list_entries(path)


def test_scan_all_finds_part_folders_only(parts_root):
    parts = PartScanner(str(parts_root)).scan_all()

    assert [p.folder_name for p in parts] == [
        "12310 BAE 1050468-0001 Rev E-A",
        "12347 Foo Bar",
        "90001",
        "90002 Harris",
    ]
    assert all(not p.exists_in_db for p in parts)


def test_scanned_part_fields(parts_root):
    parts = {p.apc_pn: p for p in PartScanner(str(parts_root)).scan_all()}

    bae = parts["12310"]
    assert bae.customer == "BAE"
    assert bae.customer_pn == "1050468-0001"
    assert bae.current_rev == "E-A"
    assert bae.item_type_id == 4
    assert bae.full_path == os.path.join(str(parts_root), "12300-12399", "12310 BAE 1050468-0001 Rev E-A")

    assert parts["90001"].customer is None
    assert parts["90001"].item_type_id == 1
    assert parts["90002"].customer == "Harris"


def test_single_range_with_misc_folder(tmp_path):
    make_dirs(tmp_path, "12345-12399/12347 Foo Bar", "12345-12399/Misc", "1234-12399/12350 Skip")

    parts = PartScanner(str(tmp_path)).scan_all()

    assert len(parts) == 1
    assert parts[0].apc_pn == "12347"
    assert parts[0].customer == "Foo"
    assert parts[0].customer_pn == "Bar"


def test_part_folder_prefix_must_be_exactly_five_digits(tmp_path):
    make_dirs(tmp_path, "12300-12399/1234 Four", "12300-12399/123456 Six", "12300-12399/12345")

    parts = PartScanner(str(tmp_path)).scan_all()

    assert [p.apc_pn for p in parts] == ["12345"]


def test_files_named_like_parts_are_ignored(tmp_path):
    make_dirs(tmp_path, "12300-12399")
    (tmp_path / "12300-12399" / "12345 drawing.pdf").write_text("pdf")
    (tmp_path / "12300-12399" / "12399").write_text("file")

    assert PartScanner(str(tmp_path)).scan_all() == []


def test_list_range_folders_sorted(parts_root):
    assert PartScanner(str(parts_root)).list_range_folders() == ["12300-12399", "90000-90099"]


def test_scan_ranges_subset(parts_root):
    parts = PartScanner(str(parts_root)).scan_ranges(["90000-90099", "not-a-range", "90000-90099"])

    assert [p.apc_pn for p in parts] == ["90001", "90002"]


def test_scan_dispatches_on_ranges(parts_root):
    scanner = PartScanner(str(parts_root))
    assert len(scanner.scan()) == 4
    assert len(scanner.scan(["12300-12399"])) == 2


def test_missing_range_yields_no_parts(parts_root):
    parts = PartScanner(str(parts_root)).scan_ranges(["55500-55599", "90000-90099"])

    assert [p.apc_pn for p in parts] == ["90001", "90002"]


def test_unreadable_range_does_not_abort_scan(parts_root):
    scanner = PartScanner(str(parts_root), lister=FlakyLister({"12300-12399"}))

    parts = scanner.scan_all()

    assert [p.apc_pn for p in parts] == ["90001", "90002"]


def test_unreadable_root_is_fatal(tmp_path):
    scanner = PartScanner(str(tmp_path / "missing"))

    with pytest.raises(FileNotFoundError):
        scanner.scan_all()
    with pytest.raises(FileNotFoundError):
        scanner.list_range_folders()


def test_root_permission_error_propagates(parts_root):
    scanner = PartScanner(str(parts_root), lister=FlakyLister({parts_root.name}))

    with pytest.raises(PermissionError):
        scanner.scan_all()


def test_parallel_scan_matches_serial(tmp_path):
    for start in range(10000, 10500, 100):
        for pn in (start + 7, start + 3):
            make_dirs(tmp_path, f"{start}-{start + 99}/{pn} Acme X-{pn}")

    serial = PartScanner(str(tmp_path)).scan_all()
    parallel = PartScanner(str(tmp_path), max_workers=4).scan_all()

    assert len(serial) == 10
    assert [p.full_path for p in parallel] == [p.full_path for p in serial]
