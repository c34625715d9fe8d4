"""Permix - run-time permission rules with lifecycle events and serializable state."""

__version__ = "1.0.0"

from shared.errors import (
    InvalidInstanceError,
    InvalidRulesError,
    NotReadyError,
    PermixException,
    PermixNotFoundError,
)
from shared.logging import configure_logging
from .core import (
    ALL_ACTIONS,
    HookBus,
    Permix,
    PermixAdapter,
    PermixView,
    ReadinessGate,
    Rules,
    StateJSON,
    check_with_rules,
    create_forbidden_context,
    create_permix,
    create_permix_adapter,
    dehydrate,
    dehydrate_json,
    get_rules,
    hydrate,
    hydrate_json,
    template,
    templator,
    validate_instance,
    validate_rules,
)

__all__ = [
    "ALL_ACTIONS",
    "HookBus",
    "InvalidInstanceError",
    "InvalidRulesError",
    "NotReadyError",
    "Permix",
    "PermixAdapter",
    "PermixException",
    "PermixNotFoundError",
    "PermixView",
    "ReadinessGate",
    "Rules",
    "StateJSON",
    "check_with_rules",
    "configure_logging",
    "create_forbidden_context",
    "create_permix",
    "create_permix_adapter",
    "dehydrate",
    "dehydrate_json",
    "get_rules",
    "hydrate",
    "hydrate_json",
    "template",
    "templator",
    "validate_instance",
    "validate_rules",
]
