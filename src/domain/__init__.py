"""Domain models - booking form records."""

from .booking_field import (
    BookingField,
    BookingFieldType,
    EditableTier,
    FieldOption,
    FieldSource,
    FieldView,
    TYPE_SPECIFIC_ATTRIBUTES,
)
from .custom_input import CustomInput, CustomInputType
from .workflow import Workflow, WorkflowAction, WorkflowStep

__all__ = [
    "BookingField",
    "BookingFieldType",
    "EditableTier",
    "FieldOption",
    "FieldSource",
    "FieldView",
    "TYPE_SPECIFIC_ATTRIBUTES",
    "CustomInput",
    "CustomInputType",
    "Workflow",
    "WorkflowAction",
    "WorkflowStep",
]
