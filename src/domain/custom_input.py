"""
Legacy custom input model.

Event types created before booking fields existed stored their extra
questions as custom inputs. They are only read to be migrated once.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class CustomInputType(str, Enum):
    """Types a legacy custom input could have."""

    TEXT = "TEXT"
    TEXTLONG = "TEXTLONG"
    NUMBER = "NUMBER"
    BOOL = "BOOL"
    RADIO = "RADIO"
    PHONE = "PHONE"


@dataclass
class CustomInput:
    """
    Legacy custom input.

    Attributes:
        label: Question label, may be empty
        type: One of CustomInputType values
        required: Whether the booker had to answer
        placeholder: Input placeholder text
        options: Label-only choices (each a dict with at least "label"),
            None when the input had no choices
    """

    label: str
    type: str
    required: bool = False
    placeholder: str = ""
    options: Optional[List[Dict[str, Any]]] = None
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomInput":
        core_fields = {"label", "type", "required", "placeholder", "options"}
        extra = {k: v for k, v in data.items() if k not in core_fields}
        return cls(
            label=data.get("label") or "",
            type=data["type"],
            required=bool(data.get("required", False)),
            placeholder=data.get("placeholder") or "",
            options=data.get("options"),
            extra_fields=extra,
        )
