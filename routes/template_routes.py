"""
Email Template Routes
"""
from flask import Blueprint, request, jsonify, current_app, g
from routes.auth import login_required
from services.errors import AuthenticationRequiredError, InvalidArgumentError
from services.notification_service import build_notification_service
from services.template_service import TemplateService, parse_template_id
import logging

logger = logging.getLogger(__name__)
template_bp = Blueprint('templates', __name__)

def _serialize(template):
    return template.model_dump(mode='json')

@template_bp.route('/templates', methods=['GET'])
@login_required
def list_templates():
    """List every email template, with the owner's overrides applied"""
    try:
        template_service = TemplateService(current_app.get_firebase_service())
        templates = template_service.list_templates(g.owner['uid'])
        return jsonify({'templates': [_serialize(t) for t in templates]}), 200

    except Exception as e:
        logger.error(f"Error listing email templates: {str(e)}")
        return jsonify({'error': str(e)}), 500

@template_bp.route('/templates/<template_id>', methods=['GET'])
@login_required
def get_template(template_id):
    """Retrieve one email template"""
    try:
        template_id = parse_template_id(template_id)
        template_service = TemplateService(current_app.get_firebase_service())
        template = template_service.get_template(template_id, g.owner['uid'])
        return jsonify({'template': _serialize(template)}), 200

    except InvalidArgumentError as e:
        return jsonify({'error': str(e)}), 404
    except Exception as e:
        logger.error(f"Error getting email template {template_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

@template_bp.route('/templates/<template_id>', methods=['PUT'])
@login_required
def save_template(template_id):
    """Save the owner's override of an email template"""
    try:
        data = request.get_json(silent=True) or {}

        subject = data.get('subject')
        body = data.get('body')
        if not isinstance(subject, str) or not subject.strip():
            return jsonify({'error': 'subject is required'}), 400
        if not isinstance(body, str) or not body.strip():
            return jsonify({'error': 'body is required'}), 400

        template_service = TemplateService(current_app.get_firebase_service())
        template_service.save_template(template_id, g.owner['uid'], subject, body)
        template = template_service.get_template(template_id, g.owner['uid'])

        return jsonify({
            'message': 'Email template saved successfully',
            'template': _serialize(template)
        }), 200

    except AuthenticationRequiredError as e:
        return jsonify({'error': str(e)}), 401
    except InvalidArgumentError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error saving email template {template_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

@template_bp.route('/templates/<template_id>/test', methods=['POST'])
@login_required
def send_test_email(template_id):
    """Send a template filled with sample data to the given address"""
    data = request.get_json(silent=True) or {}
    recipient_email = data.get('recipient_email') or g.owner.get('email')

    notification_service = build_notification_service(current_app.get_firebase_service())
    result = notification_service.send_test_email(template_id, recipient_email, g.owner['uid'])

    return jsonify(result.model_dump()), 200 if result.success else 400
