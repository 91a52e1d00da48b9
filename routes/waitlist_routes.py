"""
Waitlist Assistant Routes - AI seating suggestions
"""
from flask import Blueprint, request, jsonify, current_app
from routes.auth import login_required
from services.errors import ConfigurationError, ValidationError
from services.waitlist_service import WaitlistService
import logging

logger = logging.getLogger(__name__)
waitlist_bp = Blueprint('waitlist', __name__)

@waitlist_bp.route('/waitlist/optimize', methods=['POST'])
@login_required
def optimize_waitlist():
    """Ask the hosted model for seating arrangements and wait times"""
    try:
        data = request.get_json(silent=True) or {}

        waitlist_service = WaitlistService(llm=current_app.config.get('WAITLIST_LLM'))
        result = waitlist_service.optimize(
            data.get('reservationData'),
            data.get('tableAvailability'),
            data.get('customerWaitlist')
        )

        return jsonify({
            'suggestedSeatingArrangements': result.suggested_seating_arrangements,
            'estimatedWaitTimes': result.estimated_wait_times,
            'occupancyRate': result.occupancy_rate
        }), 200

    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except ConfigurationError as e:
        logger.error(f"Waitlist assistant is not configured: {str(e)}")
        return jsonify({'error': str(e)}), 503
    except Exception as e:
        logger.error(f"Error optimizing waitlist: {str(e)}")
        return jsonify({'error': str(e)}), 500
