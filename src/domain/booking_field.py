"""
Booking field domain model.

Represents one entry of the configurable form shown to people booking a
meeting. Stored shapes use camelCase keys; the dataclass uses snake_case
attributes and keeps any key it does not know in `extra_fields` so newer
stored attributes survive a round trip.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional


class BookingFieldType(str, Enum):
    """Closed set of field types a booking form can render."""

    NAME = "name"
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    PHONE = "phone"
    ADDRESS = "address"
    MULTIEMAIL = "multiemail"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    RADIO_INPUT = "radioInput"
    BOOLEAN = "boolean"
    URL = "url"


class EditableTier(str, Enum):
    """Who may change a field."""

    SYSTEM = "system"
    SYSTEM_BUT_OPTIONAL = "system-but-optional"
    USER = "user"


# Optional attributes that only make sense for one field type. Anything not
# listed here is shared by every type.
TYPE_SPECIFIC_ATTRIBUTES: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        BookingFieldType.NAME.value: frozenset({"variantsConfig"}),
        BookingFieldType.RADIO_INPUT.value: frozenset(
            {"optionsInputs", "getOptionsAt", "hideWhenJustOneOption"}
        ),
    }
)


@dataclass
class FieldOption:
    """A value/label pair for choice field types."""

    label: str
    value: str
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldOption":
        extra = {k: v for k, v in data.items() if k not in ("label", "value")}
        return cls(label=data["label"], value=data["value"], extra_fields=extra)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra_fields)
        data["label"] = self.label
        data["value"] = self.value
        return data


@dataclass
class FieldSource:
    """
    Provenance record explaining why a field exists.

    Attributes:
        id: "default" for fields the UI always has, or a workflow id
        type: "default" or "workflow"
        label: Human-readable source name
        edit_url: Where the source can be edited (workflows only)
        field_required: Whether this source needs the field to be filled
    """

    id: str
    type: str
    label: str
    edit_url: Optional[str] = None
    field_required: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldSource":
        return cls(
            id=data["id"],
            type=data["type"],
            label=data["label"],
            edit_url=data.get("editUrl"),
            field_required=data.get("fieldRequired"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "type": self.type, "label": self.label}
        if self.edit_url is not None:
            data["editUrl"] = self.edit_url
        if self.field_required is not None:
            data["fieldRequired"] = self.field_required
        return data


@dataclass
class FieldView:
    """Booking-flow context a field is restricted to, e.g. reschedule."""

    id: str
    label: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldView":
        return cls(id=data["id"], label=data["label"])

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label}


# Attribute name -> stored key. Order here is the serialization order.
FIELD_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "name": "name",
        "type": "type",
        "label": "label",
        "default_label": "defaultLabel",
        "placeholder": "placeholder",
        "default_placeholder": "defaultPlaceholder",
        "required": "required",
        "editable": "editable",
        "hidden": "hidden",
        "options": "options",
        "sources": "sources",
        "views": "views",
        "variants_config": "variantsConfig",
        "options_inputs": "optionsInputs",
        "get_options_at": "getOptionsAt",
        "hide_when_just_one_option": "hideWhenJustOneOption",
        "field_type_config": "fieldTypeConfig",
    }
)


@dataclass
class BookingField:
    """
    Booking form field.

    Every optional attribute uses None to mean "not set". The distinction
    matters when system defaults are merged in: only unset attributes are
    filled, so an explicit False or empty string stored by the user wins.

    `variants_config` is only valid for the `name` type and the
    `options_inputs`/`get_options_at`/`hide_when_just_one_option` trio only
    for `radioInput`; see TYPE_SPECIFIC_ATTRIBUTES.
    """

    name: str
    type: str
    label: Optional[str] = None
    default_label: Optional[str] = None
    placeholder: Optional[str] = None
    default_placeholder: Optional[str] = None
    required: Optional[bool] = None
    editable: Optional[str] = None
    hidden: Optional[bool] = None
    options: Optional[List[FieldOption]] = None
    sources: Optional[List[FieldSource]] = None
    views: Optional[List[FieldView]] = None
    variants_config: Optional[Dict[str, Any]] = None
    options_inputs: Optional[Dict[str, Any]] = None
    get_options_at: Optional[str] = None
    hide_when_just_one_option: Optional[bool] = None
    field_type_config: Optional[Dict[str, Any]] = None
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookingField":
        """
        Create BookingField from a stored (camelCase) dictionary.

        Unknown keys are kept in extra_fields.

        Args:
            data: Dictionary with field data, already schema-validated

        Returns:
            BookingField instance
        """
        known = {key: attr for attr, key in FIELD_KEYS.items()}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}

        for key, value in data.items():
            attr = known.get(key)
            if attr is None:
                extra[key] = value
            elif value is None:
                continue
            elif attr == "options":
                kwargs[attr] = [FieldOption.from_dict(o) for o in value]
            elif attr == "sources":
                kwargs[attr] = [FieldSource.from_dict(s) for s in value]
            elif attr == "views":
                kwargs[attr] = [FieldView.from_dict(v) for v in value]
            else:
                kwargs[attr] = value

        return cls(**kwargs, extra_fields=extra)

    def to_dict(self, include_computed: bool = True) -> Dict[str, Any]:
        """
        Convert BookingField to a stored (camelCase) dictionary.

        Unset attributes are omitted.

        Args:
            include_computed: If False, drop fieldTypeConfig, which is
                derived from code on every read and never persisted

        Returns:
            Dictionary representation
        """
        data: Dict[str, Any] = {}
        for attr, key in FIELD_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if attr == "field_type_config" and not include_computed:
                continue
            if attr in ("options", "sources", "views"):
                value = [item.to_dict() for item in value]
            data[key] = value

        for key, value in self.extra_fields.items():
            data.setdefault(key, value)

        return data

    def type_attributes(self) -> FrozenSet[str]:
        """Optional attributes reserved for this field's type."""
        return TYPE_SPECIFIC_ATTRIBUTES.get(self.type, frozenset())

    @property
    def is_system(self) -> bool:
        """True for fields the platform owns (either system tier)."""
        return self.editable in (
            EditableTier.SYSTEM.value,
            EditableTier.SYSTEM_BUT_OPTIONAL.value,
        )
