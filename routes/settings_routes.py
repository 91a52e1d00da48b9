"""
Restaurant Settings Routes
"""
from flask import Blueprint, request, jsonify, current_app, g
from routes.auth import login_required
import logging

logger = logging.getLogger(__name__)
settings_bp = Blueprint('settings', __name__)

INTEGER_SETTINGS = ('minAdvanceReservationHours', 'maxReservationDurationHours', 'maxGuestsPerBooking',
                    'timeSlotIntervalMinutes', 'bookingLeadTimeDays')
TEXT_SETTINGS = ('restaurantName', 'restaurantImageUrl')
# Fields a guest-facing page may read
PUBLIC_SETTINGS = INTEGER_SETTINGS + TEXT_SETTINGS + ('schedule',)

@settings_bp.route('/settings', methods=['GET'])
@login_required
def get_settings():
    """Retrieve the signed-in owner's restaurant settings"""
    try:
        firebase_service = current_app.get_firebase_service()
        settings = firebase_service.get_settings_by_id(g.owner['uid'])
        return jsonify({'settings': settings}), 200

    except Exception as e:
        logger.error(f"Error getting settings: {str(e)}")
        return jsonify({'error': str(e)}), 500

@settings_bp.route('/settings', methods=['PUT'])
@login_required
def save_settings():
    """Create or update the signed-in owner's restaurant settings"""
    try:
        data = request.get_json(silent=True) or {}

        settings = {}
        for field in INTEGER_SETTINGS:
            if field in data:
                if not isinstance(data[field], int) or data[field] < 0:
                    return jsonify({'error': f'{field} must be a non-negative integer'}), 400
                settings[field] = data[field]
        for field in TEXT_SETTINGS:
            if field in data:
                if data[field] is not None and not isinstance(data[field], str):
                    return jsonify({'error': f'{field} must be a string'}), 400
                settings[field] = data[field]
        if 'schedule' in data:
            if not isinstance(data['schedule'], list):
                return jsonify({'error': 'schedule must be a list'}), 400
            settings['schedule'] = data['schedule']

        if not settings:
            return jsonify({'error': 'No settings provided'}), 400

        firebase_service = current_app.get_firebase_service()
        saved = firebase_service.save_settings(g.owner['uid'], settings)

        return jsonify({
            'message': 'Settings saved successfully',
            'settings': saved
        }), 200

    except Exception as e:
        logger.error(f"Error saving settings: {str(e)}")
        return jsonify({'error': str(e)}), 500

@settings_bp.route('/restaurants/<owner_uid>/settings', methods=['GET'])
def get_public_settings(owner_uid):
    """Restaurant details shown on the guest booking page"""
    try:
        firebase_service = current_app.get_firebase_service()
        settings = firebase_service.get_settings_by_id(owner_uid)

        if not settings:
            return jsonify({'error': 'Restaurant not found'}), 404

        public = {field: settings[field] for field in PUBLIC_SETTINGS if field in settings}
        return jsonify({'settings': public}), 200

    except Exception as e:
        logger.error(f"Error getting public settings for {owner_uid}: {str(e)}")
        return jsonify({'error': str(e)}), 500
