"""
Booking Fields Reconciler

Guarantees that an event type's booking fields contain every system field,
correctly ordered, while keeping whatever the user customised:

1. Decide whether legacy custom inputs must be migrated (empty field list)
2. Collect SMS reminder sources from workflows
3. Merge or prepend name/email/location
4. Insert the SMS reminder number field after location when workflows need it
5. Migrate legacy custom inputs
6. Merge or append notes/guests/rescheduleReason
7. Attach field-type UI configuration
8. Validate and brand the result

Nothing the caller passes in is modified.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional

from src.domain import BookingField, CustomInput, FieldSource, Workflow
from src.fields.exceptions import OutputValidationError
from src.fields.field_types import get_field_type_config
from src.fields.merge import merge_or_queue
from src.fields.migration import migrate_custom_inputs
from src.fields.system_fields import (
    SMS_REMINDER_NUMBER_FIELD,
    SystemField,
    build_system_after_fields,
    build_system_before_fields,
    get_sms_reminder_number_field,
    get_sms_reminder_number_source,
)
from src.fields.validation import (
    validate_booking_fields,
    validate_custom_inputs,
    validate_metadata,
)
from src.utils.logger import get_logger, log_operation

logger = get_logger(__name__)


class BookingFieldsWithSystemFields(list):
    """
    Booking fields that went through reconciliation.

    A plain list of BookingField otherwise; the type itself is the marker
    that every system field is present and the list passed validation.
    """

    has_system_fields = True

    def to_dicts(self, include_computed: bool = True) -> List[Dict[str, Any]]:
        """
        Serialize for storage or transport.

        Args:
            include_computed: Pass False before persisting to drop fieldTypeConfig
        """
        return [f.to_dict(include_computed=include_computed) for f in self]

    def get(self, name: str) -> Optional[BookingField]:
        return next((f for f in self if f.name == name), None)

    def names(self) -> List[str]:
        return [f.name for f in self]


def collect_sms_number_sources(workflows: Iterable[Workflow]) -> List[FieldSource]:
    """One source per SMS-to-attendee step, in workflow then step order."""
    sources: List[FieldSource] = []
    for workflow in workflows:
        for step in workflow.steps:
            if step.sends_sms_to_attendee:
                sources.append(
                    get_sms_reminder_number_source(
                        workflow_id=workflow.id,
                        is_sms_reminder_number_required=step.number_required,
                    )
                )
    return sources


def _index_of(fields: List[BookingField], name: str) -> int:
    return next((i for i, f in enumerate(fields) if f.name == name), -1)


def ensure_booking_inputs_have_system_fields(
    booking_fields: List[BookingField],
    disable_guests: bool,
    additional_notes_required: bool,
    custom_inputs: List[CustomInput],
    workflows: List[Workflow],
) -> BookingFieldsWithSystemFields:
    """
    Reconcile parsed booking fields with the system fields.

    Args:
        booking_fields: Stored fields of the event type, possibly empty
        disable_guests: Whether the guests field is hidden
        additional_notes_required: Whether the notes field is mandatory
        custom_inputs: Legacy custom inputs (only used when booking_fields is empty)
        workflows: Workflows attached to the event type

    Returns:
        BookingFieldsWithSystemFields

    Raises:
        OutputValidationError: If the reconciled list is invalid, e.g. a
            migrated custom input reuses a system field name
    """
    fields = copy.deepcopy(list(booking_fields))
    workflows = workflows or []

    # A non-empty list means the migration already happened.
    handle_migration = not fields

    sms_number_sources = collect_sms_number_sources(workflows)

    missing_before, merged_before = merge_or_queue(fields, build_system_before_fields())
    fields = missing_before + fields
    logger.debug(
        "Applied system fields ahead of user fields",
        operation="reconcile_system_before_fields",
        context={
            "added": [f.name for f in missing_before],
            "merged": merged_before,
        },
    )

    # Workflows created before booking fields existed never stored the SMS
    # field, so it is added whenever a workflow needs it and it is missing.
    if sms_number_sources and _index_of(fields, SMS_REMINDER_NUMBER_FIELD) == -1:
        location_index = _index_of(fields, SystemField.LOCATION.value)
        sms_field = get_sms_reminder_number_field()
        sms_field.sources = sms_number_sources
        fields.insert(location_index + 1, sms_field)
        logger.debug(
            "Inserted SMS reminder number field",
            operation="reconcile_sms_reminder_number",
            context={
                "position": location_index + 1,
                "workflow_ids": [s.id for s in sms_number_sources],
            },
        )

    if handle_migration:
        migrated = migrate_custom_inputs(custom_inputs)
        fields.extend(migrated)
        logger.debug(
            "Migrated legacy custom inputs",
            operation="reconcile_custom_inputs",
            context={"migrated": [f.name for f in migrated]},
        )

    missing_after, merged_after = merge_or_queue(
        fields,
        build_system_after_fields(
            disable_guests=disable_guests,
            additional_notes_required=additional_notes_required,
        ),
    )
    fields = fields + missing_after
    logger.debug(
        "Applied system fields behind user fields",
        operation="reconcile_system_after_fields",
        context={
            "added": [f.name for f in missing_after],
            "merged": merged_after,
        },
    )

    for field in fields:
        field_type_config = get_field_type_config(field.type)
        if field_type_config is not None:
            field.field_type_config = field_type_config

    serialized = [f.to_dict() for f in fields]
    validate_booking_fields(serialized, error_cls=OutputValidationError)

    logger.info(
        "Booking fields reconciled",
        operation="reconcile_booking_fields",
        context={
            "field_count": len(fields),
            "user_field_count": sum(1 for f in fields if not f.is_system),
            "migrated_custom_inputs": handle_migration and bool(custom_inputs),
            "sms_sources": len(sms_number_sources),
        },
    )
    return BookingFieldsWithSystemFields(BookingField.from_dict(d) for d in serialized)


@log_operation("get_booking_fields_with_system_fields")
def get_booking_fields_with_system_fields(
    booking_fields: Optional[List[Dict[str, Any]]],
    disable_guests: bool,
    custom_inputs: Optional[List[Dict[str, Any]]],
    metadata: Optional[Dict[str, Any]],
    workflows: Optional[List[Dict[str, Any]]],
) -> BookingFieldsWithSystemFields:
    """
    Validate stored event-type data and reconcile its booking fields.

    Args:
        booking_fields: Stored booking fields (camelCase dicts) or None
        disable_guests: Whether the guests field is hidden
        custom_inputs: Legacy custom inputs or None
        metadata: Event-type metadata or None; only additionalNotesRequired is read
        workflows: Associated workflows, either {"workflow": {...}} entries or
            bare {"id", "steps"} dicts, or None

    Returns:
        BookingFieldsWithSystemFields

    Raises:
        InputValidationError: If any input is malformed; nothing is reconciled
        OutputValidationError: If the reconciled list is invalid
    """
    parsed_metadata = validate_metadata(metadata or {})
    parsed_booking_fields = validate_booking_fields(booking_fields or [])
    parsed_custom_inputs = validate_custom_inputs(custom_inputs or [])

    return ensure_booking_inputs_have_system_fields(
        booking_fields=[BookingField.from_dict(f) for f in parsed_booking_fields],
        disable_guests=disable_guests,
        additional_notes_required=bool(parsed_metadata.get("additionalNotesRequired", False)),
        custom_inputs=[CustomInput.from_dict(ci) for ci in parsed_custom_inputs],
        workflows=[Workflow.from_dict(w) for w in workflows or []],
    )
