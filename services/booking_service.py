"""
Booking Service - Restaurant Booking Logic
Stores bookings for a tenant and watches the weekly plan limit
"""
import logging
from datetime import datetime, time, timedelta, timezone

from config import Config
from services.errors import ValidationError

logger = logging.getLogger(__name__)

BOOKING_STATUSES = ('pending', 'confirmed', 'seated', 'completed', 'cancelled')
STARTER_PLAN = 'starter'


def week_bounds(now):
    """Return the Monday 00:00 start and Sunday 23:59:59 end of the week containing now"""
    start = datetime.combine((now - timedelta(days=now.weekday())).date(), time.min, tzinfo=now.tzinfo)
    end = start + timedelta(days=7) - timedelta(microseconds=1)
    return start, end


class BookingService:
    """Service for restaurant bookings"""

    def __init__(self, firebase_service, notification_service):
        self.firebase_service = firebase_service
        self.notification_service = notification_service

    def create_booking(self, booking_data, owner_uid, owner_email=None, created_by_admin=False):
        """
        Create a booking for a restaurant

        Args:
            booking_data: Guest name, date, time, party size and optional contact fields
            owner_uid: Tenant the booking belongs to
            owner_email: Admin email used for plan notifications
            created_by_admin: True when an authenticated admin creates the booking

        Returns:
            The stored booking dictionary
        """
        if not owner_uid:
            raise ValidationError("Cannot create booking: Owner ID is missing. "
                                  "Bookings must be associated with a restaurant.")

        status = booking_data.get('status', 'pending')
        if status not in BOOKING_STATUSES:
            raise ValidationError(f"status must be one of: {', '.join(BOOKING_STATUSES)}")

        # Only admin-created bookings count towards the upgrade reminder
        if created_by_admin:
            self.check_and_notify_for_upgrade(owner_uid, owner_email)

        booking = self.firebase_service.create_booking({
            **booking_data,
            'status': status,
            'ownerUID': owner_uid
        })
        logger.info(f"Created booking {booking.get('id')} for owner {owner_uid}")
        return booking

    def check_and_notify_for_upgrade(self, owner_uid, owner_email, now=None):
        """
        Send the upgrade plan email when a starter tenant reaches the weekly threshold

        Returns:
            ActionResult when an email was attempted, otherwise None
        """
        try:
            settings = self.firebase_service.get_settings_by_id(owner_uid) or {}
            if settings.get('plan') != STARTER_PLAN:
                return None

            week_start, week_end = week_bounds(now or datetime.now(timezone.utc))
            weekly_bookings = self.firebase_service.count_bookings_between(owner_uid, week_start, week_end)

            if weekly_bookings != Config.UPGRADE_THRESHOLD:
                return None
            if not owner_email:
                logger.warning(f"Owner {owner_uid} reached the upgrade threshold but has no email address")
                return None

            return self.notification_service.send_upgrade_plan(
                owner_email,
                owner_uid,
                settings.get('restaurantName') or 'Your Restaurant',
                weekly_bookings,
                Config.UPGRADE_BOOKING_LIMIT
            )

        except Exception as e:
            logger.error(f"Error checking for plan upgrade notification: {str(e)}")
            return None
