# portal/routes/admin.py
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from portal.db.session import get_database
from portal.importers.part_scanner import PartScanner
from portal.logger import get_logger
from portal.schemas.write_back import ImportRequest, SyncRequest
from portal.services.catalog_service import CatalogService
from portal.services.part_import_service import PartImportService
from portal.services.reconciliation_service import ReconciliationService

logger = get_logger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')


def build_scanner() -> PartScanner:
    return PartScanner(
        current_app.config['PARTS_ROOT'],
        max_workers=current_app.config.get('SCAN_MAX_WORKERS', 1),
    )


def error_response(message: str, error: Exception, status: int = 500):
    return jsonify({'error': message, 'details': str(error)}), status


@admin_bp.route('/scan-parts', methods=['GET'])
def scan_parts():
    """Existence check of part folders (or the range folder list)."""
    scanner = build_scanner()

    try:
        if request.args.get('action') == 'list-ranges':
            return jsonify({'ranges': scanner.list_range_folders()})

        ranges_param = request.args.get('ranges')
        ranges = [r for r in ranges_param.split(',') if r.strip()] if ranges_param else None
        scanned = scanner.scan(ranges)

        with get_database().session_scope() as db:
            reconciliation = ReconciliationService(CatalogService(db))
            report = reconciliation.existence_report(scanned)

        return jsonify(report.to_wire())
    except Exception as e:
        logger.error(f"Error scanning parts: {e}")
        return error_response('Failed to scan parts', e)


@admin_bp.route('/import-parts', methods=['POST'])
def import_parts():
    """Insert the selected new parts; per-record failures are reported, not fatal."""
    try:
        payload = ImportRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return error_response('Invalid import payload', e, 400)

    if not payload.parts:
        return jsonify({'error': 'No parts to import'}), 400

    try:
        with get_database().session_scope() as db:
            service = PartImportService(db, CatalogService(db))
            result = service.import_parts(payload.parts)

        return jsonify({'success': True, **result.to_wire()})
    except Exception as e:
        logger.error(f"Error importing parts: {e}")
        return error_response('Failed to import parts', e)


@admin_bp.route('/sync-parts', methods=['GET'])
def compare_parts():
    """Field diff of every scanned part against the catalog."""
    try:
        scanned = build_scanner().scan_all()

        with get_database().session_scope() as db:
            reconciliation = ReconciliationService(CatalogService(db))
            report = reconciliation.diff_report(scanned)

        return jsonify(report.to_wire())
    except Exception as e:
        logger.error(f"Error comparing parts: {e}")
        return error_response('Failed to compare parts', e)


@admin_bp.route('/sync-parts', methods=['POST'])
def sync_parts():
    """Overwrite catalog rows with folder values."""
    try:
        payload = SyncRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return error_response('Invalid sync payload', e, 400)

    try:
        with get_database().session_scope() as db:
            service = PartImportService(db, CatalogService(db))
            result = service.sync_parts(payload.updates)

        return jsonify({'success': True, **result.to_wire()})
    except Exception as e:
        logger.error(f"Error syncing parts: {e}")
        return error_response('Failed to sync parts', e)
