"""
Email Service - transactional email through the Brevo REST API
"""
import logging
import os

import requests

from config import Config
from services.errors import ConfigurationError, ProviderError, TransportError
from services.models import DispatchResult

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = 'Email service is not configured (missing API key).'
UNKNOWN_ERROR_MESSAGE = 'An unknown error occurred while sending email.'


class EmailService:
    """Sends a single email per call, no retries and no deduplication"""

    def __init__(self, sender_resolver, api_key=None, api_url=None):
        """
        Args:
            sender_resolver: SenderResolver used when the email has no explicit sender
            api_key: Brevo API key, read from BREVO_API_KEY at send time when omitted
            api_url: Brevo endpoint, defaults to Config.BREVO_API_URL
        """
        self.sender_resolver = sender_resolver
        self.api_key = api_key
        self.api_url = api_url or Config.BREVO_API_URL

    def _get_api_key(self):
        api_key = self.api_key if self.api_key is not None else os.getenv('BREVO_API_KEY', '')
        if not api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)
        return api_key

    @staticmethod
    def build_payload(email, sender):
        return {
            'sender': {'name': sender.name, 'email': sender.email},
            'to': [{'email': email.to}],
            'subject': email.subject,
            'htmlContent': email.html_content,
        }

    def _post(self, api_key, payload):
        try:
            response = requests.post(
                self.api_url,
                json=payload,
                headers={
                    'accept': 'application/json',
                    'api-key': api_key,
                    'content-type': 'application/json',
                },
            )
        except requests.RequestException as e:
            raise TransportError(str(e) or UNKNOWN_ERROR_MESSAGE) from e

        if not response.ok:
            message = None
            try:
                error_body = response.json()
                if isinstance(error_body, dict):
                    message = error_body.get('message')
            except ValueError:
                error_body = response.text
            logger.error(f"Brevo API error response ({response.status_code}): {error_body}")
            raise ProviderError(
                message or f"Brevo API request failed with status {response.status_code}",
                status_code=response.status_code
            )

        try:
            result = response.json()
            return result['messageId']
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(f"Malformed response from Brevo API: {str(e) or type(e).__name__}") from e

    def send(self, email):
        """
        Send an email

        Args:
            email: OutboundEmail

        Returns:
            DispatchResult with the provider message id, or the error text
        """
        try:
            api_key = self._get_api_key()
        except ConfigurationError as e:
            logger.error('BREVO_API_KEY is not set in environment variables.')
            return DispatchResult.failed(str(e))

        sender = self.sender_resolver.resolve_sender(
            explicit_name=email.sender_name,
            explicit_email=email.sender_email,
            owner_uid=email.owner_uid
        )
        payload = self.build_payload(email, sender)

        logger.info(f"Preparing to send email for owner: {email.owner_uid or 'default'}")
        logger.info(f"To: {email.to} | Subject: {email.subject[:100]} | Sender: {sender.name} <{sender.email}>")

        try:
            message_id = self._post(api_key, payload)
        except ProviderError as e:
            return DispatchResult.failed(str(e))
        except TransportError as e:
            logger.error(f"Error sending email via Brevo: {str(e)}")
            return DispatchResult.failed(str(e))
        except Exception as e:
            logger.error(f"Unexpected error sending email via Brevo: {str(e)}")
            return DispatchResult.failed(str(e) or UNKNOWN_ERROR_MESSAGE)

        logger.info(f"Email sent successfully via Brevo. Message ID: {message_id}")
        return DispatchResult.ok(str(message_id))
