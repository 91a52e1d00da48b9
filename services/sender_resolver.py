"""Sender Resolver - who an outgoing email is from"""
import logging

from config import Config
from services.models import TenantSenderIdentity

logger = logging.getLogger(__name__)


class SenderResolver:
    """Derives the from-identity of a message from tenant settings"""

    def __init__(self, firebase_service, sender_email=None, fallback_name=None):
        self.firebase_service = firebase_service
        self.sender_email = sender_email or Config.DEFAULT_SENDER_EMAIL
        self.fallback_name = fallback_name or Config.DEFAULT_RESTAURANT_NAME

    def resolve_sender(self, explicit_name=None, explicit_email=None, owner_uid=None):
        """
        Resolve the sender name and address of an outgoing email

        Args:
            explicit_name: Caller supplied display name
            explicit_email: Caller supplied address
            owner_uid: Tenant whose restaurant name to use

        Returns:
            TenantSenderIdentity, never raises
        """
        if explicit_name and explicit_email:
            return TenantSenderIdentity(name=explicit_name, email=explicit_email)

        email = explicit_email or self.sender_email
        if explicit_name:
            return TenantSenderIdentity(name=explicit_name, email=email)

        if not owner_uid:
            logger.warning("No owner given for sender lookup. Using default sender name.")
            return TenantSenderIdentity(name=self.fallback_name, email=email)

        try:
            settings = self.firebase_service.get_settings_by_id(owner_uid)
        except Exception as e:
            logger.warning(f"Could not fetch settings for owner {owner_uid} to get sender name, using default: {str(e)}")
            return TenantSenderIdentity(name=self.fallback_name, email=email)

        name = (settings or {}).get('restaurantName')
        if not isinstance(name, str) or not name.strip():
            if name:
                logger.warning(f"Ignoring non-text restaurantName for owner {owner_uid}, using default sender name.")
            name = self.fallback_name
        return TenantSenderIdentity(name=name, email=email)
