"""
Booking Routes
"""
from flask import Blueprint, request, jsonify, current_app, g
from routes.auth import get_current_owner, login_required
from services.booking_service import BOOKING_STATUSES, BookingService
from services.errors import ValidationError
from services.notification_service import build_notification_service
import logging

logger = logging.getLogger(__name__)
booking_bp = Blueprint('bookings', __name__)

REQUIRED_BOOKING_FIELDS = ('guestName', 'date', 'time', 'partySize')
EDITABLE_BOOKING_FIELDS = ('guestName', 'guestEmail', 'guestPhone', 'date', 'time',
                           'partySize', 'status', 'notes', 'tableId')

def _get_owned_booking(firebase_service, booking_id):
    booking = firebase_service.get_booking(booking_id)
    if not booking or booking.get('ownerUID') != g.owner['uid']:
        return None
    return booking

@booking_bp.route('/bookings', methods=['POST'])
def create_booking():
    """Create a booking from the guest form or the admin dashboard"""
    try:
        data = request.get_json(silent=True) or {}

        # Validate required fields
        for field in REQUIRED_BOOKING_FIELDS:
            if data.get(field) in (None, ''):
                return jsonify({'error': f'{field} is required'}), 400
        if not isinstance(data['partySize'], int) or data['partySize'] < 1:
            return jsonify({'error': 'partySize must be a positive integer'}), 400

        # Signed-in admins book for their own restaurant, guests name the restaurant
        owner = get_current_owner()
        owner_uid = owner['uid'] if owner else data.get('owner_uid')

        booking_data = {field: data[field] for field in EDITABLE_BOOKING_FIELDS if field in data}

        firebase_service = current_app.get_firebase_service()
        booking_service = BookingService(firebase_service, build_notification_service(firebase_service))
        booking = booking_service.create_booking(
            booking_data,
            owner_uid,
            owner_email=owner.get('email') if owner else None,
            created_by_admin=owner is not None
        )

        return jsonify({
            'message': 'Booking created successfully',
            'booking': booking
        }), 201

    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error creating booking: {str(e)}")
        return jsonify({'error': str(e)}), 500

@booking_bp.route('/bookings', methods=['GET'])
@login_required
def list_bookings():
    """List the signed-in owner's bookings"""
    try:
        firebase_service = current_app.get_firebase_service()
        bookings = firebase_service.get_bookings(g.owner['uid'])
        return jsonify({'bookings': bookings}), 200

    except Exception as e:
        logger.error(f"Error listing bookings: {str(e)}")
        return jsonify({'error': str(e)}), 500

@booking_bp.route('/bookings/<booking_id>', methods=['GET'])
@login_required
def get_booking(booking_id):
    """Retrieve booking details"""
    try:
        firebase_service = current_app.get_firebase_service()
        booking = _get_owned_booking(firebase_service, booking_id)

        if not booking:
            return jsonify({'error': 'Booking not found'}), 404

        return jsonify({'booking': booking}), 200

    except Exception as e:
        logger.error(f"Error getting booking: {str(e)}")
        return jsonify({'error': str(e)}), 500

@booking_bp.route('/bookings/<booking_id>', methods=['PATCH'])
@login_required
def update_booking(booking_id):
    """Edit a booking"""
    try:
        data = request.get_json(silent=True) or {}

        firebase_service = current_app.get_firebase_service()
        if not _get_owned_booking(firebase_service, booking_id):
            return jsonify({'error': 'Booking not found'}), 404

        update_data = {field: data[field] for field in EDITABLE_BOOKING_FIELDS if field in data}
        if not update_data:
            return jsonify({'error': 'No editable fields provided'}), 400
        if 'status' in update_data and update_data['status'] not in BOOKING_STATUSES:
            return jsonify({'error': f"status must be one of: {', '.join(BOOKING_STATUSES)}"}), 400

        booking = firebase_service.update_booking(booking_id, update_data)

        return jsonify({
            'message': 'Booking updated successfully',
            'booking': booking
        }), 200

    except Exception as e:
        logger.error(f"Error updating booking: {str(e)}")
        return jsonify({'error': str(e)}), 500

@booking_bp.route('/bookings/<booking_id>', methods=['DELETE'])
@login_required
def delete_booking(booking_id):
    """Delete a booking"""
    try:
        firebase_service = current_app.get_firebase_service()
        if not _get_owned_booking(firebase_service, booking_id):
            return jsonify({'error': 'Booking not found'}), 404

        firebase_service.delete_booking(booking_id)
        return jsonify({'message': 'Booking deleted successfully'}), 200

    except Exception as e:
        logger.error(f"Error deleting booking: {str(e)}")
        return jsonify({'error': str(e)}), 500

@booking_bp.route('/bookings/<booking_id>/notes', methods=['POST'])
@login_required
def add_communication_note(booking_id):
    """Add a note to a booking's communication history"""
    try:
        data = request.get_json(silent=True) or {}
        note = (data.get('note') or '').strip()
        if not note:
            return jsonify({'error': 'note is required'}), 400

        firebase_service = current_app.get_firebase_service()
        if not _get_owned_booking(firebase_service, booking_id):
            return jsonify({'error': 'Booking not found'}), 404

        firebase_service.add_communication_note(booking_id, note)
        return jsonify({'message': 'Communication note added successfully.'}), 201

    except Exception as e:
        logger.error(f"Error adding note to booking {booking_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500
