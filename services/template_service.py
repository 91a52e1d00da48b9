"""
Template Service - default email templates and per-tenant overrides
"""
import logging

from services.errors import AuthenticationRequiredError, InvalidArgumentError
from services.models import NotificationTemplate, TemplateId

logger = logging.getLogger(__name__)

BOOKING_ACCEPTED_PLACEHOLDERS = [
    '{{guestName}}',
    '{{bookingDate}}',
    '{{bookingTime}}',
    '{{partySize}}',
    '{{restaurantName}}',
    '{{notes}}',
]

NO_AVAILABILITY_PLACEHOLDERS = [
    '{{guestName}}',
    '{{requestedDate}}',
    '{{requestedTime}}',
    '{{requestedPartySize}}',
    '{{restaurantName}}',
]

WAITING_LIST_PLACEHOLDERS = [
    '{{guestName}}',
    '{{requestedDate}}',
    '{{requestedTime}}',
    '{{partySize}}',
    '{{restaurantName}}',
    '{{estimatedWaitTime}}',
]

UPGRADE_PLAN_PLACEHOLDERS = [
    '{{restaurantName}}',
    '{{currentBookingCount}}',
    '{{bookingLimit}}',
]

DEFAULT_TEMPLATES = {
    TemplateId.BOOKING_ACCEPTED: {
        'subject': 'Your booking at {{restaurantName}} is confirmed!',
        'body': (
            'Dear {{guestName}},\n\n'
            'Thank you for your booking at {{restaurantName}}.\n\n'
            'Your reservation details are:\n'
            'Date: {{bookingDate}}\n'
            'Time: {{bookingTime}}\n'
            'Party Size: {{partySize}}\n'
            '{{#if notes}}Special Requests: {{notes}}\n{{/if}}'
            '\nWe look forward to welcoming you!\n\n'
            'Sincerely,\n'
            'The {{restaurantName}} Team'
        ),
        'placeholders': BOOKING_ACCEPTED_PLACEHOLDERS,
    },
    TemplateId.NO_AVAILABILITY: {
        'subject': 'Regarding your booking request at {{restaurantName}}',
        'body': (
            'Dear {{guestName}},\n\n'
            'Thank you for your interest in dining at {{restaurantName}}.\n\n'
            'Unfortunately, we do not have availability for {{requestedPartySize}} guests '
            'on {{requestedDate}} at {{requestedTime}}.\n\n'
            'We apologize for any inconvenience. Please feel free to try booking for another '
            'date or time, or contact us directly.\n\n'
            'Sincerely,\n'
            'The {{restaurantName}} Team'
        ),
        'placeholders': NO_AVAILABILITY_PLACEHOLDERS,
    },
    TemplateId.WAITING_LIST: {
        'subject': "You've been added to the waitlist at {{restaurantName}}",
        'body': (
            'Dear {{guestName}},\n\n'
            'You have been added to the waitlist for {{restaurantName}} for {{partySize}} guests '
            'for {{requestedDate}} around {{requestedTime}}.\n\n'
            'Your estimated wait time is {{estimatedWaitTime}}.\n\n'
            'We will notify you as soon as a table becomes available.\n\n'
            'Sincerely,\n'
            'The {{restaurantName}} Team'
        ),
        'placeholders': WAITING_LIST_PLACEHOLDERS,
    },
    TemplateId.UPGRADE_PLAN: {
        'subject': '{{restaurantName}} is close to its weekly booking limit',
        'body': (
            'Hello,\n\n'
            '{{restaurantName}} has received {{currentBookingCount}} bookings this week. '
            'Your current plan allows up to {{bookingLimit}} bookings per week.\n\n'
            'Upgrade your plan to keep accepting reservations without interruption.\n\n'
            'Thank you for using our booking service.'
        ),
        'placeholders': UPGRADE_PLAN_PLACEHOLDERS,
    },
}


def parse_template_id(template_id):
    """
    Validate a template id against the closed set of notification kinds

    Raises:
        InvalidArgumentError: if the id is empty, not a string or unknown
    """
    if isinstance(template_id, TemplateId):
        return template_id
    if not template_id or not isinstance(template_id, str) or not template_id.strip():
        raise InvalidArgumentError("Invalid templateId provided.")
    try:
        return TemplateId(template_id.strip())
    except ValueError:
        raise InvalidArgumentError(f'Unknown templateId "{template_id}".')


def get_default_template(template_id):
    """Return the compiled-in template for an id"""
    template_id = parse_template_id(template_id)
    default = DEFAULT_TEMPLATES[template_id]
    return NotificationTemplate(
        id=template_id,
        subject=default['subject'],
        body=default['body'],
        placeholders=list(default['placeholders'])
    )


class TemplateService:
    """Resolves email templates, preferring tenant overrides over defaults"""

    def __init__(self, firebase_service):
        self.firebase_service = firebase_service

    def get_template(self, template_id, owner_uid=None):
        """
        Get the template a tenant should send for a notification kind

        Args:
            template_id: One of the TemplateId values
            owner_uid: Tenant whose override to look up, if any

        Returns:
            NotificationTemplate, never raises. The compiled-in default when no
            override exists or the override could not be loaded, and the
            bookingAccepted default for an unrecognized id. Callers that must
            reject unknown ids validate with parse_template_id first.
        """
        try:
            template_id = parse_template_id(template_id)
        except InvalidArgumentError as e:
            logger.warning(f"{str(e)} Falling back to {TemplateId.BOOKING_ACCEPTED.value}.")
            return get_default_template(TemplateId.BOOKING_ACCEPTED)

        template = get_default_template(template_id)

        if not owner_uid:
            logger.warning(f"No owner given for template {template.id.value}. Returning default.")
            return template

        try:
            override = self.firebase_service.get_template_override(owner_uid, template.id.value)
        except Exception as e:
            logger.error(f"Error fetching email template {template.id.value} for owner {owner_uid}: {str(e)}")
            return template

        if not override:
            logger.info(f"Template {template.id.value} not overridden by owner {owner_uid}. Returning default.")
            return template

        # Placeholders stay the compiled-in list, overrides only change wording
        return template.model_copy(update={
            'subject': override.get('subject') or template.subject,
            'body': override.get('body') or template.body,
            'updated_at': override.get('updatedAt'),
        })

    def list_templates(self, owner_uid=None):
        """Resolve every known template for a tenant"""
        return [self.get_template(template_id, owner_uid) for template_id in TemplateId]

    def save_template(self, template_id, owner_uid, subject, body):
        """
        Create or update a tenant's override of a template

        Raises:
            AuthenticationRequiredError: if no tenant is authenticated
            InvalidArgumentError: if the template id is empty or unknown
        """
        if not owner_uid:
            raise AuthenticationRequiredError("User not authenticated to access email templates.")
        template_id = parse_template_id(template_id)

        self.firebase_service.upsert_template_override(owner_uid, template_id.value, {
            'subject': subject,
            'body': body
        })
        logger.info(f"Saved email template {template_id.value} for owner {owner_uid}")
