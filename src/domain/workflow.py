"""Workflow records as the reconciler sees them (read-only)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union


class WorkflowAction(str, Enum):
    """Workflow step actions. Only SMS_ATTENDEE affects booking fields."""

    EMAIL_HOST = "EMAIL_HOST"
    EMAIL_ATTENDEE = "EMAIL_ATTENDEE"
    EMAIL_ADDRESS = "EMAIL_ADDRESS"
    SMS_ATTENDEE = "SMS_ATTENDEE"
    SMS_NUMBER = "SMS_NUMBER"
    WHATSAPP_ATTENDEE = "WHATSAPP_ATTENDEE"
    WHATSAPP_NUMBER = "WHATSAPP_NUMBER"


@dataclass
class WorkflowStep:
    action: str
    number_required: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowStep":
        return cls(
            action=data["action"],
            number_required=bool(data.get("numberRequired")),
        )

    @property
    def sends_sms_to_attendee(self) -> bool:
        return self.action == WorkflowAction.SMS_ATTENDEE.value


@dataclass
class Workflow:
    id: Union[int, str]
    steps: List[WorkflowStep] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workflow":
        """
        Build a Workflow from either the bare workflow dict or the
        event-type association shape {"workflow": {...}}.
        """
        if "workflow" in data:
            data = data["workflow"]
        return cls(
            id=data["id"],
            steps=[WorkflowStep.from_dict(s) for s in data.get("steps") or []],
        )
