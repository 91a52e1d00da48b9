"""Data models for the booking notification pipeline"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class TemplateId(str, Enum):
    """Notification kinds that own an email template"""
    BOOKING_ACCEPTED = "bookingAccepted"
    NO_AVAILABILITY = "noAvailability"
    WAITING_LIST = "waitingList"
    UPGRADE_PLAN = "upgradePlan"


class NotificationTemplate(BaseModel):
    """Resolved subject/body pair for one notification kind"""
    id: TemplateId
    subject: str
    body: str
    placeholders: List[str] = Field(default_factory=list)
    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last modification time, only set for tenant overrides"
    )


class TenantSenderIdentity(BaseModel):
    """From-identity of an outgoing message"""
    name: str
    email: str


class OutboundEmail(BaseModel):
    """A single message handed to the email provider"""
    to: str
    subject: str
    html_content: str
    sender_name: Optional[str] = None
    sender_email: Optional[str] = None
    owner_uid: Optional[str] = Field(
        default=None,
        description="Tenant whose settings select the sender display name"
    )


class DispatchResult(BaseModel):
    """Uniform outcome of a provider call"""
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_outcome(self):
        if self.success and self.error is not None:
            raise ValueError("a successful dispatch carries no error")
        if not self.success and self.message_id is not None:
            raise ValueError("a failed dispatch carries no message id")
        return self

    @classmethod
    def ok(cls, message_id):
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, error):
        return cls(success=False, error=error)


class ActionResult(BaseModel):
    """User-facing result of a notification action"""
    success: bool
    message: str


class BookingDetails(BaseModel):
    """Booking fields used to fill booking-related templates"""
    guest_name: str
    date: Optional[str] = Field(default=None, description="YYYY-MM-DD")
    time: Optional[str] = Field(default=None, description="HH:MM, 24-hour")
    party_size: int
    notes: Optional[str] = None


class WaitlistOptimizationResult(BaseModel):
    """Structured answer of the waitlist assistant model"""
    suggested_seating_arrangements: str = Field(
        description="JSON string of suggested seating arrangements, optimizing for maximum occupancy and minimal wait times."
    )
    estimated_wait_times: str = Field(
        description="JSON string containing estimated wait times for each party on the waitlist."
    )
    occupancy_rate: float = Field(
        description="The predicted occupancy rate (%) with the suggested seating arrangement."
    )
