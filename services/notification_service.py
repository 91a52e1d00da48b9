"""
Notification Service - transactional booking emails

Every action assembles template data, renders the tenant's template and hands
the result to the email service. Actions never raise: failures come back as
an ActionResult with a descriptive message.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

from pydantic import ValidationError as PydanticValidationError

from config import Config
from services.email_service import EmailService
from services.errors import InvalidArgumentError, RenderError, ValidationError
from services.models import ActionResult, BookingDetails, OutboundEmail, TemplateId
from services.sender_resolver import SenderResolver
from services.template_renderer import render
from services.template_service import TemplateService, parse_template_id

logger = logging.getLogger(__name__)

NOT_AVAILABLE = 'N/A'
DEFAULT_ESTIMATED_WAIT_TIME = 'Please contact us for current wait times.'


def format_display_date(value):
    """
    Format a YYYY-MM-DD (or ISO datetime) value as e.g. 'May 1, 2024'

    Returns 'N/A' when the value is missing or cannot be parsed.
    """
    if not value:
        return NOT_AVAILABLE
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        text = str(value).strip()
        # fromisoformat only accepts a trailing Z from Python 3.11 on
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text).date()
        except ValueError:
            logger.warning(f"Invalid date for email: {value}")
            return NOT_AVAILABLE
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


class NotificationService:
    """Service for sending booking notifications"""

    def __init__(self, template_service, email_service, firebase_service):
        self.template_service = template_service
        self.email_service = email_service
        self.firebase_service = firebase_service

    # ==================== HELPERS ====================

    @staticmethod
    def _validate(recipient_email, owner_uid):
        if not recipient_email or '@' not in recipient_email:
            raise ValidationError("Invalid recipient email address provided.")
        if not owner_uid:
            raise ValidationError("Admin user ID is missing.")

    def _get_settings(self, owner_uid):
        try:
            return self.firebase_service.get_settings_by_id(owner_uid)
        except Exception as e:
            logger.warning(f"Could not fetch settings for owner {owner_uid}: {str(e)}")
            return None

    def _load_template_and_settings(self, template_id, owner_uid):
        """Fetch the template and the tenant settings concurrently"""
        with ThreadPoolExecutor(max_workers=2) as executor:
            template_future = executor.submit(self.template_service.get_template, template_id, owner_uid)
            settings_future = executor.submit(self._get_settings, owner_uid)
            template = template_future.result()
            settings = settings_future.result()

        if not template or not template.subject or not template.body:
            raise ValidationError(f'Template "{template_id.value}" not found or is incomplete.')
        return template, settings

    def _restaurant_name(self, settings):
        return (settings or {}).get('restaurantName') or Config.DEFAULT_RESTAURANT_NAME

    def _render_and_send(self, template, template_data, recipient_email, owner_uid):
        subject = render(template.subject, template_data)
        body = render(template.body, template_data)

        if not subject.strip() or not body.strip():
            logger.error(f"Rendered subject or body is empty for template {template.id.value}. "
                         f"Subject: \"{subject}\", Body (first 100 chars): \"{body[:100]}\"")
            raise RenderError(
                f'Rendered subject or body for template "{template.id.value}" became empty after '
                f'processing placeholders. Please check your template content and placeholders.'
            )

        return self.email_service.send(OutboundEmail(
            to=recipient_email,
            subject=subject,
            html_content=body,
            owner_uid=owner_uid
        ))

    # ==================== BOOKING EMAILS ====================

    def booking_template_data(self, details, restaurant_name):
        formatted_date = format_display_date(details.date)
        return {
            'guestName': details.guest_name,
            'restaurantName': restaurant_name,
            'bookingDate': formatted_date,
            'bookingTime': details.time or NOT_AVAILABLE,
            'partySize': details.party_size,
            'notes': details.notes or '',
            'requestedDate': formatted_date,
            'requestedTime': details.time or NOT_AVAILABLE,
            'requestedPartySize': details.party_size,
            'estimatedWaitTime': DEFAULT_ESTIMATED_WAIT_TIME,
        }

    def _send_booking_email(self, template_id, recipient_email, owner_uid, booking_details):
        logger.info(f"Sending {template_id.value} email to {recipient_email} for owner {owner_uid}")
        try:
            self._validate(recipient_email, owner_uid)
            if isinstance(booking_details, dict):
                booking_details = BookingDetails(**booking_details)

            template, settings = self._load_template_and_settings(template_id, owner_uid)
            template_data = self.booking_template_data(booking_details, self._restaurant_name(settings))
            result = self._render_and_send(template, template_data, recipient_email, owner_uid)

        except (ValidationError, RenderError, InvalidArgumentError) as e:
            return ActionResult(success=False, message=str(e))
        except PydanticValidationError as e:
            return ActionResult(success=False, message=f"Invalid booking details: {e.errors()[0]['msg']}")
        except Exception as e:
            logger.error(f"Error sending {template_id.value} email: {str(e)}")
            return ActionResult(success=False, message=f"Error sending email: {str(e)}")

        if result.success:
            return ActionResult(success=True, message=f"Email sent to {recipient_email}.")
        return ActionResult(success=False, message=f"Failed to send email: {result.error or 'Unknown error'}")

    def send_booking_confirmation(self, recipient_email, owner_uid, booking_details):
        """
        Send the booking-accepted email to a guest

        Args:
            recipient_email: Guest email address
            owner_uid: Tenant owning the booking
            booking_details: BookingDetails or an equivalent dict

        Returns:
            ActionResult
        """
        return self._send_booking_email(TemplateId.BOOKING_ACCEPTED, recipient_email, owner_uid, booking_details)

    def send_no_availability(self, recipient_email, owner_uid, booking_details):
        """Tell a guest no table is available for the requested slot"""
        return self._send_booking_email(TemplateId.NO_AVAILABILITY, recipient_email, owner_uid, booking_details)

    def send_waiting_list(self, recipient_email, owner_uid, booking_details):
        """Tell a guest they were added to the waitlist"""
        return self._send_booking_email(TemplateId.WAITING_LIST, recipient_email, owner_uid, booking_details)

    # ==================== PLAN EMAILS ====================

    def send_upgrade_plan(self, recipient_email, owner_uid, restaurant_name, current_booking_count, booking_limit):
        """
        Ask a tenant on a limited plan to upgrade

        Args:
            recipient_email: Tenant owner's email address
            owner_uid: Tenant close to the limit
            restaurant_name: Name shown in the email
            current_booking_count: Bookings made this week
            booking_limit: Weekly limit of the current plan

        Returns:
            ActionResult
        """
        logger.info(f"Sending upgrade plan email to {recipient_email} for owner {owner_uid}")
        try:
            self._validate(recipient_email, owner_uid)
            template, settings = self._load_template_and_settings(TemplateId.UPGRADE_PLAN, owner_uid)
            template_data = {
                'restaurantName': restaurant_name or self._restaurant_name(settings),
                'currentBookingCount': current_booking_count,
                'bookingLimit': booking_limit,
            }
            result = self._render_and_send(template, template_data, recipient_email, owner_uid)

        except (ValidationError, RenderError, InvalidArgumentError) as e:
            return ActionResult(success=False, message=str(e))
        except Exception as e:
            logger.error(f"Error sending upgrade plan email: {str(e)}")
            return ActionResult(success=False, message=f"Error sending email: {str(e)}")

        if result.success:
            logger.info(f"Upgrade email sent successfully to {recipient_email}.")
            return ActionResult(success=True, message="Upgrade email sent.")
        logger.error(f"Failed to send upgrade email: {result.error}")
        return ActionResult(success=False, message=f"Failed to send email: {result.error or 'Unknown error'}")

    # ==================== TEST SENDS ====================

    def dummy_template_data(self, template_id, restaurant_name):
        """Realistic sample data used by the admin 'send test email' button"""
        today = format_display_date(date.today())
        common = {'guestName': 'Test Guest', 'restaurantName': restaurant_name}

        if template_id == TemplateId.BOOKING_ACCEPTED:
            return {**common, 'bookingDate': today, 'bookingTime': '07:00 PM', 'partySize': 2,
                    'notes': 'This is a test booking with some special notes.'}
        if template_id == TemplateId.NO_AVAILABILITY:
            return {**common, 'requestedDate': today, 'requestedTime': '08:00 PM', 'requestedPartySize': 4}
        if template_id == TemplateId.WAITING_LIST:
            return {**common, 'requestedDate': today, 'bookingDate': today, 'requestedTime': '07:30 PM',
                    'bookingTime': '07:30 PM', 'partySize': 3, 'estimatedWaitTime': '30-45 minutes'}
        return {**common, 'bookingLimit': Config.UPGRADE_BOOKING_LIMIT,
                'currentBookingCount': Config.UPGRADE_THRESHOLD}

    def send_test_email(self, template_id, recipient_email, owner_uid):
        """Send a template filled with dummy data to an admin"""
        logger.info(f"Test email for template {template_id}, recipient {recipient_email}, owner {owner_uid}")
        try:
            self._validate(recipient_email, owner_uid)
            template_id = parse_template_id(template_id)

            template, settings = self._load_template_and_settings(template_id, owner_uid)
            restaurant_name = self._restaurant_name(settings)
            template_data = self.dummy_template_data(template_id, restaurant_name)
            result = self._render_and_send(template, template_data, recipient_email, owner_uid)

        except (ValidationError, RenderError, InvalidArgumentError) as e:
            return ActionResult(success=False, message=str(e))
        except Exception as e:
            logger.error(f"Unexpected error sending test email: {str(e)}")
            return ActionResult(success=False, message=f"Error sending test email: {str(e)}")

        if result.success:
            return ActionResult(
                success=True,
                message=f'Test email sent successfully to {recipient_email} from "{restaurant_name}". '
                        f'Brevo Message ID: {result.message_id or "N/A"}'
            )
        return ActionResult(success=False,
                            message=f"Failed to send test email: {result.error or 'Unknown error from email service'}")


def build_notification_service(firebase_service):
    """Wire the notification pipeline on top of a Firebase service"""
    return NotificationService(
        template_service=TemplateService(firebase_service),
        email_service=EmailService(SenderResolver(firebase_service)),
        firebase_service=firebase_service
    )
