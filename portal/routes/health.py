# portal/routes/health.py
import os
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from portal.db.session import get_database

health_bp = Blueprint('health', __name__, url_prefix='/api')


def check_parts_root() -> dict:
    root = current_app.config['PARTS_ROOT']
    if os.path.isdir(root) and os.access(root, os.R_OK):
        return {'success': True, 'message': f'Parts root readable: {root}'}
    return {'success': False, 'message': f'Parts root not readable: {root}'}


@health_bp.route('/health', methods=['GET'])
def health():
    ok, message = get_database().ping()
    checks = {
        'catalog': {'success': ok, 'message': message},
        'partsRoot': check_parts_root(),
    }
    all_healthy = all(check['success'] for check in checks.values())

    return jsonify({
        'status': 'healthy' if all_healthy else 'unhealthy',
        'checks': checks,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }), 200 if all_healthy else 503
