"""
Field-type UI configuration.

Loaded once from field_type_config.yaml at import time and exposed as a
read-only mapping. The configuration is attached to every field of a
registered type when booking fields are read and is never persisted.
"""

import copy
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from src.config.settings import get_settings

FIELD_TYPE_CONFIG: Mapping[str, Mapping[str, Any]] = MappingProxyType(
    {
        field_type: MappingProxyType(config)
        for field_type, config in get_settings().load_field_type_config().items()
    }
)


def get_field_type_config(field_type: str) -> Optional[Dict[str, Any]]:
    """
    Return a private copy of the UI config registered for a field type.

    Args:
        field_type: Booking field type, e.g. "name"

    Returns:
        Config dictionary, or None when the type has nothing registered
    """
    config = FIELD_TYPE_CONFIG.get(field_type)
    if config is None:
        return None
    return copy.deepcopy(dict(config))
