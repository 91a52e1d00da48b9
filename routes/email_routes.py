"""
Booking Email Routes
"""
from flask import Blueprint, request, jsonify, current_app, g
from routes.auth import login_required
from services.notification_service import build_notification_service
import logging

logger = logging.getLogger(__name__)
email_bp = Blueprint('emails', __name__)

BOOKING_EMAIL_KINDS = {
    'confirmation': 'send_booking_confirmation',
    'no-availability': 'send_no_availability',
    'waiting-list': 'send_waiting_list',
}

@email_bp.route('/bookings/<booking_id>/emails/<kind>', methods=['POST'])
@login_required
def send_booking_email(booking_id, kind):
    """Email the guest of a booking using one of the booking templates"""
    if kind not in BOOKING_EMAIL_KINDS:
        return jsonify({'error': f"kind must be one of: {', '.join(BOOKING_EMAIL_KINDS)}"}), 404

    try:
        firebase_service = current_app.get_firebase_service()
        booking = firebase_service.get_booking(booking_id)
        if not booking or booking.get('ownerUID') != g.owner['uid']:
            return jsonify({'error': 'Booking not found'}), 404
    except Exception as e:
        logger.error(f"Error loading booking {booking_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

    data = request.get_json(silent=True) or {}
    recipient_email = data.get('recipient_email') or booking.get('guestEmail')

    booking_details = {
        'guest_name': booking.get('guestName', ''),
        'date': booking.get('date'),
        'time': booking.get('time'),
        'party_size': booking.get('partySize', 0),
        'notes': booking.get('notes'),
    }

    notification_service = build_notification_service(firebase_service)
    send = getattr(notification_service, BOOKING_EMAIL_KINDS[kind])
    result = send(recipient_email, g.owner['uid'], booking_details)

    if result.success:
        try:
            firebase_service.add_communication_note(booking_id, f"Sent {kind} email to {recipient_email}")
        except Exception as e:
            logger.error(f"Error recording communication note on booking {booking_id}: {str(e)}")

    return jsonify(result.model_dump()), 200 if result.success else 400

@email_bp.route('/emails/upgrade-plan', methods=['POST'])
@login_required
def send_upgrade_plan_email():
    """Send the upgrade plan email to the signed-in owner"""
    data = request.get_json(silent=True) or {}

    try:
        current_booking_count = int(data.get('current_booking_count', 0))
        booking_limit = int(data.get('booking_limit', current_app.config['UPGRADE_BOOKING_LIMIT']))
    except (TypeError, ValueError):
        return jsonify({'error': 'current_booking_count and booking_limit must be integers'}), 400

    notification_service = build_notification_service(current_app.get_firebase_service())
    result = notification_service.send_upgrade_plan(
        data.get('recipient_email') or g.owner.get('email'),
        g.owner['uid'],
        data.get('restaurant_name'),
        current_booking_count,
        booking_limit
    )

    return jsonify(result.model_dump()), 200 if result.success else 400
