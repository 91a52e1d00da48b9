"""
Table Routes
"""
from flask import Blueprint, request, jsonify, current_app, g
from routes.auth import login_required
from services.errors import ValidationError
from services.table_service import TableService
import logging

logger = logging.getLogger(__name__)
table_bp = Blueprint('tables', __name__)

def _table_service():
    return TableService(current_app.get_firebase_service())

@table_bp.route('/tables', methods=['GET'])
@login_required
def list_tables():
    """List the signed-in owner's tables"""
    try:
        tables = _table_service().get_tables(g.owner['uid'])
        return jsonify({'tables': tables}), 200

    except Exception as e:
        logger.error(f"Error fetching tables: {str(e)}")
        return jsonify({'error': str(e)}), 500

@table_bp.route('/tables', methods=['POST'])
@login_required
def add_table():
    """Add a table to the floor plan"""
    try:
        data = request.get_json(silent=True) or {}
        table = _table_service().add_table(g.owner['uid'], data)

        return jsonify({
            'message': 'Table created successfully',
            'table': table
        }), 201

    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error adding table: {str(e)}")
        return jsonify({'error': str(e)}), 500

@table_bp.route('/tables/<table_id>', methods=['PATCH'])
@login_required
def update_table(table_id):
    """Edit a table"""
    try:
        data = request.get_json(silent=True) or {}
        table = _table_service().update_table(g.owner['uid'], table_id, data)

        if not table:
            return jsonify({'error': 'Table not found'}), 404

        return jsonify({
            'message': 'Table updated successfully',
            'table': table
        }), 200

    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error updating table: {str(e)}")
        return jsonify({'error': str(e)}), 500

@table_bp.route('/tables/<table_id>', methods=['DELETE'])
@login_required
def delete_table(table_id):
    """Remove a table from the floor plan"""
    try:
        if not _table_service().delete_table(g.owner['uid'], table_id):
            return jsonify({'error': 'Table not found'}), 404

        return jsonify({'message': 'Table deleted successfully'}), 200

    except Exception as e:
        logger.error(f"Error deleting table: {str(e)}")
        return jsonify({'error': str(e)}), 500

@table_bp.route('/tables/status', methods=['POST'])
@login_required
def batch_update_status():
    """Set the same status on several tables"""
    try:
        data = request.get_json(silent=True) or {}
        _table_service().batch_update_statuses(g.owner['uid'], data.get('table_ids'), data.get('status'))
        return jsonify({'message': 'Table statuses updated successfully'}), 200

    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error updating table statuses: {str(e)}")
        return jsonify({'error': str(e)}), 500

@table_bp.route('/tables/summary', methods=['GET'])
@login_required
def table_summary():
    """Available table count and occupancy rate for the dashboard"""
    table_service = _table_service()
    owner_uid = g.owner['uid']

    return jsonify({
        'availableTables': table_service.get_available_tables_count(owner_uid),
        'occupancyRate': table_service.get_occupancy_rate(owner_uid)
    }), 200
