"""
Table Service - Floor Plan Management
Stores a tenant's tables and summarizes how many are free
"""
import logging

from services.errors import ValidationError

logger = logging.getLogger(__name__)

TABLE_STATUSES = ('available', 'occupied', 'reserved', 'cleaning', 'unavailable', 'pending')
BUSY_STATUSES = ('occupied', 'reserved')
MAX_TABLE_CAPACITY = 50
MAX_NAME_LENGTH = 50
MAX_LOCATION_LENGTH = 50


def normalize_table(table):
    """Fill in the fields older or hand-written table documents may lack"""
    return {
        **table,
        'name': table.get('name') or f"Unnamed Table {table.get('id')}",
        'capacity': table.get('capacity') or 1,
        'status': table.get('status') or 'available',
        'location': table.get('location') or '',
    }


def validate_table_data(data, partial=False):
    """
    Check table fields sent by the admin dashboard

    Args:
        data: name, capacity, status and location
        partial: True for updates, where every field is optional

    Returns:
        Dictionary with only the accepted fields

    Raises:
        ValidationError: on a missing or out of range field
    """
    cleaned = {}

    if 'name' in data or not partial:
        name = data.get('name')
        if not isinstance(name, str) or not name.strip():
            raise ValidationError('name is required')
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(f'name must be at most {MAX_NAME_LENGTH} characters')
        cleaned['name'] = name.strip()

    if 'capacity' in data or not partial:
        capacity = data.get('capacity')
        if isinstance(capacity, bool) or not isinstance(capacity, int) \
                or not 1 <= capacity <= MAX_TABLE_CAPACITY:
            raise ValidationError(f'capacity must be an integer between 1 and {MAX_TABLE_CAPACITY}')
        cleaned['capacity'] = capacity

    if 'status' in data or not partial:
        status = data.get('status', 'available')
        if status not in TABLE_STATUSES:
            raise ValidationError(f"status must be one of: {', '.join(TABLE_STATUSES)}")
        cleaned['status'] = status

    if data.get('location'):
        location = data['location']
        if not isinstance(location, str) or len(location) > MAX_LOCATION_LENGTH:
            raise ValidationError(f'location must be text of at most {MAX_LOCATION_LENGTH} characters')
        cleaned['location'] = location

    return cleaned


class TableService:
    """Service for a restaurant's tables"""

    def __init__(self, firebase_service):
        self.firebase_service = firebase_service

    def get_tables(self, owner_uid):
        return [normalize_table(t) for t in self.firebase_service.get_tables(owner_uid)]

    def add_table(self, owner_uid, data):
        table_data = validate_table_data(data)
        table = self.firebase_service.create_table(owner_uid, table_data)
        logger.info(f"Created table {table.get('id')} for owner {owner_uid}")
        return normalize_table(table)

    def update_table(self, owner_uid, table_id, data):
        """Update a table, returning None when it does not exist"""
        update_data = validate_table_data(data, partial=True)
        if not update_data:
            raise ValidationError('No editable fields provided')
        if not self.firebase_service.get_table(owner_uid, table_id):
            return None
        return normalize_table(self.firebase_service.update_table(owner_uid, table_id, update_data))

    def delete_table(self, owner_uid, table_id):
        """Delete a table, returning False when it does not exist"""
        if not self.firebase_service.get_table(owner_uid, table_id):
            return False
        self.firebase_service.delete_table(owner_uid, table_id)
        logger.info(f"Deleted table {table_id} for owner {owner_uid}")
        return True

    def get_available_tables_count(self, owner_uid):
        """Number of available tables, 0 when the tables cannot be read"""
        try:
            tables = self.get_tables(owner_uid)
        except Exception as e:
            logger.error(f"Error getting available tables count: {str(e)}")
            return 0
        return sum(1 for t in tables if t['status'] == 'available')

    def get_occupancy_rate(self, owner_uid):
        """
        Percentage of occupied or reserved tables, rounded half up

        Returns 0 for a restaurant without tables or when the tables cannot be read.
        """
        try:
            tables = self.get_tables(owner_uid)
        except Exception as e:
            logger.error(f"Error calculating occupancy rate: {str(e)}")
            return 0
        if not tables:
            return 0
        busy = sum(1 for t in tables if t['status'] in BUSY_STATUSES)
        return int(busy * 100 / len(tables) + 0.5)

    def batch_update_statuses(self, owner_uid, table_ids, status):
        """Set one status on several tables at once"""
        if not isinstance(table_ids, list) or not table_ids \
                or not all(isinstance(t, str) and t for t in table_ids):
            raise ValidationError('table_ids must be a non-empty list of table IDs')
        if status not in TABLE_STATUSES:
            raise ValidationError(f"status must be one of: {', '.join(TABLE_STATUSES)}")

        self.firebase_service.update_table_statuses(owner_uid, table_ids, status)
        logger.info(f"Set status {status} on {len(table_ids)} tables for owner {owner_uid}")
