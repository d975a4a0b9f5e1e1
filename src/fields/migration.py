"""
Legacy custom input migration.

Turns the custom inputs of an event type that predates booking fields into
user-editable booking fields. Runs only when the stored field list is empty.
"""

import re
from types import MappingProxyType
from typing import List, Mapping

from django.utils.text import slugify

from src.domain import (
    BookingField,
    BookingFieldType,
    CustomInput,
    CustomInputType,
    EditableTier,
    FieldOption,
)

CUSTOM_INPUT_TYPE_TO_FIELD_TYPE: Mapping[str, str] = MappingProxyType(
    {
        CustomInputType.TEXT.value: BookingFieldType.TEXT.value,
        CustomInputType.TEXTLONG.value: BookingFieldType.TEXTAREA.value,
        CustomInputType.NUMBER.value: BookingFieldType.NUMBER.value,
        CustomInputType.BOOL.value: BookingFieldType.BOOLEAN.value,
        CustomInputType.RADIO.value: BookingFieldType.RADIO.value,
        CustomInputType.PHONE.value: BookingFieldType.PHONE.value,
    }
)


def humanize_input_type(input_type: str) -> str:
    """
    PHONE -> Phone
    """
    return input_type[0].upper() + input_type[1:].lower()


def field_name_from_label(text: str) -> str:
    """
    Slug used as a field name and prefill query parameter.

    Letters in any script are kept; underscores become dashes.

    >>> field_name_from_label("first_name")
    'first-name'
    """
    slug = slugify(text, allow_unicode=True)
    return re.sub(r"[-_]+", "-", slug).strip("-")


def custom_input_to_field(custom_input: CustomInput, index: int) -> BookingField:
    """
    Convert one legacy custom input.

    The slugified label used to be the prefill query parameter, so it
    becomes the field name. Labels could be empty; names cannot, so those
    get "<type>-<position>" instead, as do labels made only of punctuation.

    Args:
        custom_input: Legacy input
        index: Zero-based position in the custom input list

    Returns:
        New user-editable BookingField
    """
    label = custom_input.label or humanize_input_type(custom_input.type)
    fallback_name = field_name_from_label(f"{custom_input.type}-{index + 1}")
    name = field_name_from_label(custom_input.label) or fallback_name

    # Value is the label verbatim (no trimming, no lowercasing), which is
    # what custom inputs submitted.
    options = [
        FieldOption.from_dict({**option, "value": option["label"]})
        for option in custom_input.options or []
    ]

    return BookingField(
        label=label,
        editable=EditableTier.USER.value,
        name=name,
        placeholder=custom_input.placeholder,
        type=CUSTOM_INPUT_TYPE_TO_FIELD_TYPE[custom_input.type],
        required=custom_input.required,
        options=options,
    )


def migrate_custom_inputs(custom_inputs: List[CustomInput]) -> List[BookingField]:
    """Convert legacy custom inputs to booking fields, preserving order."""
    return [custom_input_to_field(ci, index) for index, ci in enumerate(custom_inputs)]
