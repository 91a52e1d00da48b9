"""
Waitlist Service - AI-assisted seating suggestions
Forwards reservation, table and waitlist data to a hosted model and returns
its structured answer. No seating logic lives here.
"""
import json
import logging

from langchain_core.messages import HumanMessage, SystemMessage

from services.errors import ValidationError
from services.models import WaitlistOptimizationResult
from services.utils import get_llm

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an AI restaurant seating optimization expert. Given the restaurant data, reservation information, and waitlist, provide an optimal seating arrangement to maximize occupancy and minimize guest wait times.
Consider all data to provide a JSON-formatted suggested seating arrangement, estimated wait times for each party on the waitlist, and the predicted occupancy rate with your suggested arrangement."""


def _require_json(name, value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} is required and must be a JSON string")
    try:
        json.loads(value)
    except ValueError as e:
        raise ValidationError(f"{name} is not valid JSON: {str(e)}")
    return value


class WaitlistService:
    """Service for AI waitlist optimization"""

    def __init__(self, llm=None):
        self._llm = llm

    def _structured_llm(self):
        llm = self._llm or get_llm()
        return llm.with_structured_output(WaitlistOptimizationResult)

    def optimize(self, reservation_data, table_availability, customer_waitlist):
        """
        Suggest seating arrangements for the current waitlist

        Args:
            reservation_data: JSON string of reservations (party size, arrival time, requests)
            table_availability: JSON string of tables, sizes and availability
            customer_waitlist: JSON string of waiting parties (name, party size, arrival time)

        Returns:
            WaitlistOptimizationResult

        Raises:
            ValidationError: if an input is not a JSON string
            ConfigurationError: if no model API key is configured
        """
        reservation_data = _require_json('reservationData', reservation_data)
        table_availability = _require_json('tableAvailability', table_availability)
        customer_waitlist = _require_json('customerWaitlist', customer_waitlist)

        prompt = (
            f"Reservation Data: {reservation_data}\n\n"
            f"Table Availability: {table_availability}\n\n"
            f"Customer Waitlist: {customer_waitlist}"
        )

        result = self._structured_llm().invoke([
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=prompt)
        ])
        logger.info(f"Waitlist optimization predicted occupancy {result.occupancy_rate}%")
        return result
