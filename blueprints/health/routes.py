"""
Health check route, public
"""
from datetime import datetime, timezone

from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from blueprints.health import health_bp
from extensions import db


@health_bp.route('/health', methods=['GET'])
def health():
    """Report whether the API can reach its database"""
    try:
        db.session.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Health check failed: {e}')
        return jsonify({
            'status': 'ERROR',
            'message': 'Database connection failed',
            'error': str(e),
        }), 500

    return jsonify({
        'status': 'OK',
        'message': 'FamList backend is running',
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })
