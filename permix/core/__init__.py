"""
Permix core package.

Holds the rule store and evaluator together with the pieces it is built
from. Rules map entity names to action names, and each action is either a
fixed boolean or a predicate over a data instance. Anything undefined
evaluates to False.

Modules of interest:
- models: Rule and wire-state types plus the JSON adapter for the wire form.
- validation: Structural checks on rules and on instance identity.
- hooks: Named-event listener registry used for lifecycle events.
- gate: One-shot readiness signal behind check_async/is_ready_async.
- engine: The Permix instance with setup/check and the pure evaluator.
- hydration: Boolean-only projection of rules and its reinstallation.
- template: Rule sets validated ahead of any instance.
- adapter: Framework-neutral base for request-scoped integrations.
"""

from .adapter import PermixAdapter, PermixView, create_forbidden_context, create_permix_adapter
from .engine import Permix, check_with_rules, create_permix, get_rules
from .gate import ReadinessGate
from .hooks import HookBus
from .hydration import dehydrate, dehydrate_json, hydrate, hydrate_json
from .models import ALL_ACTIONS, Predicate, Rules, StateJSON
from .template import template, templator
from .validation import validate_instance, validate_rules

__all__ = [
    "ALL_ACTIONS",
    "HookBus",
    "Permix",
    "PermixAdapter",
    "PermixView",
    "Predicate",
    "ReadinessGate",
    "Rules",
    "StateJSON",
    "check_with_rules",
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
