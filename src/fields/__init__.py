"""Booking Fields Module"""

from .exceptions import (
    BookingFieldsError,
    BookingFieldsValidationError,
    InputValidationError,
    OutputValidationError,
)
from .reconciler import (
    BookingFieldsWithSystemFields,
    ensure_booking_inputs_have_system_fields,
    get_booking_fields_with_system_fields,
)
from .system_fields import (
    SMS_REMINDER_NUMBER_FIELD,
    SystemField,
    get_sms_reminder_number_field,
    get_sms_reminder_number_source,
)

__all__ = [
    "BookingFieldsError",
    "BookingFieldsValidationError",
    "InputValidationError",
    "OutputValidationError",
    "BookingFieldsWithSystemFields",
    "ensure_booking_inputs_have_system_fields",
    "get_booking_fields_with_system_fields",
    "SMS_REMINDER_NUMBER_FIELD",
    "SystemField",
    "get_sms_reminder_number_field",
    "get_sms_reminder_number_source",
]
