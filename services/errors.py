"""Exceptions raised inside the notification pipeline.

They never cross the action layer: every service converts its own failures
into a DispatchResult or ActionResult before returning.
"""


class NotificationError(Exception):
    """Base class for notification pipeline failures"""


class ConfigurationError(NotificationError):
    """A required secret or setting is missing"""


class ValidationError(NotificationError):
    """Caller input is malformed (recipient, owner key, template)"""


class RenderError(NotificationError):
    """A template rendered to an empty subject or body"""


class ProviderError(NotificationError):
    """The email provider answered with a non-success status"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(NotificationError):
    """Network or parse failure while talking to the email provider"""


class AuthenticationRequiredError(NotificationError):
    """A write was attempted without an authenticated tenant"""


class InvalidArgumentError(NotificationError):
    """An identifier is empty, malformed or not part of a closed set"""
