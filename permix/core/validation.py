"""
Structural validation for rules and instances.
"""

from collections.abc import Mapping
from typing import Any

from shared.errors import InvalidInstanceError

# Opaque identity marker carried by every engine instance
PERMIX_TAG = object()


def validate_rules(value: Any) -> bool:
    """Return True if ``value`` is a mapping of mappings of booleans or callables.

    Example::

        validate_rules({"post": {"create": True, "read": False}})  # True
        validate_rules({"post": {"create": True, "read": "string"}})  # False
    """
    if not isinstance(value, Mapping):
        return False

    for actions in value.values():
        if not isinstance(actions, Mapping):
            return False
        for rule in actions.values():
            if not (isinstance(rule, bool) or callable(rule)):
                return False

    return True


def validate_instance(instance: Any) -> None:
    """Raise InvalidInstanceError unless ``instance`` carries the engine tag."""
    if getattr(instance, "_permix_tag", None) is not PERMIX_TAG:
        raise InvalidInstanceError(details={"type": type(instance).__name__})
