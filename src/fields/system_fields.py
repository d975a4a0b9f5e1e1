"""
System booking fields.

Fields every booking form has, built fresh on each call so callers can
never mutate a shared default. "Before" fields go ahead of user fields,
"after" fields behind them. Labels and placeholders are translation keys.
"""

from enum import Enum
from typing import List, Union

from src.domain import BookingField, EditableTier, FieldSource, FieldView

SMS_REMINDER_NUMBER_FIELD = "smsReminderNumber"


class SystemField(str, Enum):
    """Names of fields owned by the platform."""

    NAME = "name"
    EMAIL = "email"
    LOCATION = "location"
    NOTES = "notes"
    GUESTS = "guests"
    RESCHEDULE_REASON = "rescheduleReason"
    SMS_REMINDER_NUMBER = SMS_REMINDER_NUMBER_FIELD


def default_source() -> FieldSource:
    return FieldSource(id="default", type="default", label="Default")


def get_sms_reminder_number_field() -> BookingField:
    """SMS reminder number field, without sources."""
    return BookingField(
        name=SMS_REMINDER_NUMBER_FIELD,
        type="phone",
        default_label="number_sms_notifications",
        default_placeholder="enter_phone_number",
        editable=EditableTier.SYSTEM.value,
    )


def get_sms_reminder_number_source(
    workflow_id: Union[int, str], is_sms_reminder_number_required: bool
) -> FieldSource:
    """
    Source entry recording that a workflow needs the attendee's phone number.

    Args:
        workflow_id: Workflow primary key
        is_sms_reminder_number_required: Whether the SMS step requires the number

    Returns:
        FieldSource of type "workflow"
    """
    return FieldSource(
        id=str(workflow_id),
        type="workflow",
        label="Workflow",
        field_required=is_sms_reminder_number_required,
        edit_url=f"/workflows/{workflow_id}",
    )


def build_system_before_fields() -> List[BookingField]:
    """name, email and location, in that order."""
    return [
        BookingField(
            name=SystemField.NAME.value,
            type="name",
            editable=EditableTier.SYSTEM.value,
            # Email sending reads this label
            default_label="your_name",
            required=True,
            variants_config={
                "defaultVariant": "fullName",
                "variants": {
                    "firstAndLastName": {
                        "fields": [
                            {
                                # Sub-field names are fixed; only the main field is configurable
                                "name": "firstName",
                                "type": "text",
                                "label": "First Name",
                                "required": True,
                            },
                            {
                                "name": "lastName",
                                "type": "text",
                                "label": "Last Name",
                                "required": False,
                            },
                        ]
                    },
                    "fullName": {
                        "fields": [
                            {
                                "name": "fullName",
                                "type": "text",
                                "label": "Your Name",
                                "required": True,
                            }
                        ]
                    },
                },
            },
            sources=[default_source()],
        ),
        BookingField(
            name=SystemField.EMAIL.value,
            type="email",
            default_label="email_address",
            required=True,
            editable=EditableTier.SYSTEM.value,
            sources=[default_source()],
        ),
        BookingField(
            name=SystemField.LOCATION.value,
            type="radioInput",
            default_label="location",
            editable=EditableTier.SYSTEM.value,
            hide_when_just_one_option=True,
            required=False,
            get_options_at="locations",
            options_inputs={
                "attendeeInPerson": {
                    "type": "address",
                    "required": True,
                    "placeholder": "",
                },
                "phone": {
                    "type": "phone",
                    "required": True,
                    "placeholder": "",
                },
            },
            sources=[default_source()],
        ),
    ]


def build_system_after_fields(
    disable_guests: bool, additional_notes_required: bool
) -> List[BookingField]:
    """
    notes, guests and rescheduleReason, in that order.

    Args:
        disable_guests: Hide the guests field
        additional_notes_required: Make the notes field mandatory
    """
    return [
        BookingField(
            name=SystemField.NOTES.value,
            type="textarea",
            default_label="additional_notes",
            editable=EditableTier.SYSTEM_BUT_OPTIONAL.value,
            required=additional_notes_required,
            default_placeholder="share_additional_notes",
            sources=[default_source()],
        ),
        BookingField(
            name=SystemField.GUESTS.value,
            type="multiemail",
            default_label="additional_guests",
            editable=EditableTier.SYSTEM_BUT_OPTIONAL.value,
            required=False,
            hidden=disable_guests,
            sources=[default_source()],
        ),
        BookingField(
            name=SystemField.RESCHEDULE_REASON.value,
            type="textarea",
            default_label="reschedule_reason",
            editable=EditableTier.SYSTEM_BUT_OPTIONAL.value,
            default_placeholder="reschedule_placeholder",
            required=False,
            views=[FieldView(id="reschedule", label="Reschedule View")],
            sources=[default_source()],
        ),
    ]
