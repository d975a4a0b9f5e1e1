"""
Merging stored system fields with their code-defined defaults.

A stored system field may have been customised by the user in any
attribute, so it is never replaced. The code version only fills attributes
the stored one does not set, which lets new properties reach fields that
were saved before those properties existed.

Precedence, per attribute:
    stored value (not None)  >  code default
extra_fields are merged key by key with the same precedence.
"""

import dataclasses
from typing import Any, Dict, List, Tuple

from src.domain import BookingField


def merge_system_field(system_field: BookingField, existing: BookingField) -> BookingField:
    """
    Fill the gaps of a stored system field from its code definition.

    Args:
        system_field: Field as defined in code
        existing: Field as stored for the event type (same name)

    Returns:
        New BookingField; neither argument is modified

    Raises:
        ValueError: If the two fields do not share a name
    """
    if system_field.name != existing.name:
        raise ValueError(
            f"Cannot merge field '{system_field.name}' into '{existing.name}'"
        )

    merged: Dict[str, Any] = {}
    for attr in dataclasses.fields(BookingField):
        if attr.name == "extra_fields":
            continue
        existing_value = getattr(existing, attr.name)
        merged[attr.name] = (
            existing_value if existing_value is not None else getattr(system_field, attr.name)
        )

    merged["extra_fields"] = {**system_field.extra_fields, **existing.extra_fields}
    return BookingField(**merged)


def merge_or_queue(
    fields: List[BookingField], system_fields: List[BookingField]
) -> Tuple[List[BookingField], List[str]]:
    """
    Merge each system field into its stored counterpart, in place.

    Args:
        fields: Working field list (modified in place)
        system_fields: Code-defined fields, in insertion order

    Returns:
        (system fields missing from `fields`, in order;
         names of fields that were merged)
    """
    missing: List[BookingField] = []
    merged_names: List[str] = []
    for system_field in system_fields:
        index = next((i for i, f in enumerate(fields) if f.name == system_field.name), -1)
        if index == -1:
            missing.append(system_field)
        else:
            fields[index] = merge_system_field(system_field, fields[index])
            merged_names.append(system_field.name)
    return missing, merged_names
