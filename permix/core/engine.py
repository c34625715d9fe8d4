"""
Rule store and evaluation engine for Permix.
"""

import inspect
from typing import Any, Callable, Generic, Optional, Union

from shared.config import PermixSettings, get_settings
from shared.errors import InvalidRulesError
from shared.logging import get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from .gate import ReadinessGate
from .hooks import HookBus, Listener
from .hydration import dehydrate_rules, hydrate_rules
from .models import (
    ALL_ACTIONS, ActionSpec, ActionT, EntityT, Rules, RulesOrProvider, StateJSON
)
from .template import template as _template
from .validation import PERMIX_TAG, validate_instance, validate_rules


def check_with_rules(rules: Optional[Rules], entity: str, action: ActionSpec, data: Any = None) -> bool:
    """Evaluate ``action`` on ``entity`` against an explicit rules value.

    Missing rules, entities and actions evaluate to False. A sequence of
    actions is the AND of each; ``"all"`` is the AND over every action the
    entity currently defines.
    """
    if not rules or entity not in rules:
        return False

    entity_rules = rules[entity]
    if entity_rules is None:
        return False

    if action == ALL_ACTIONS:
        values = list(entity_rules.values())
    elif isinstance(action, str):
        values = [entity_rules.get(action)]
    else:
        values = [entity_rules.get(a) for a in action]

    return all(_evaluate(value, data) for value in values)


def _evaluate(value: Any, data: Any) -> bool:
    if callable(value):
        return bool(value(data))
    return bool(value)


class Permix(Generic[EntityT, ActionT]):
    """Permission manager holding one current rules value.

    Example::

        permix = Permix()
        permix.setup({"post": {"create": True, "read": lambda post: post["published"]}})

        permix.check("post", "create")                      # True
        permix.check("post", "read", {"published": False})  # False
        permix.check("post", ["create", "read"], {"published": True})  # True
        permix.check("post", "all", {"published": True})    # True

    The type parameters only narrow entity and action names for type checkers,
    e.g. ``Permix[Literal["post"], Literal["create", "read"]]``.
    """

    def __init__(
        self,
        client_context: Optional[bool] = None,
        settings: Optional[PermixSettings] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.settings = settings or get_settings()
        self.client_context = self.settings.client_context if client_context is None else client_context
        self.logger = get_logger("permix.engine")

        if metrics is None and self.settings.metrics_enabled:
            metrics = get_metrics_collector()
        self.metrics = metrics

        self._permix_tag = PERMIX_TAG
        self._rules: Optional[Rules] = None
        self._setup_called = False
        self._ready = False
        self._ready_fired = False
        self._gate = ReadinessGate()
        self.hooks = HookBus()

    # Setup

    def setup(self, rules: RulesOrProvider) -> None:
        """Install rules, or the rules returned by a zero-argument provider.

        Use ``setup_async`` for providers that return awaitables.
        """
        if callable(rules):
            rules = rules()

        if inspect.isawaitable(rules):
            if inspect.iscoroutine(rules):
                rules.close()
            self._reject("Asynchronous rule providers require setup_async")

        self._install(rules)

    async def setup_async(self, rules: RulesOrProvider) -> None:
        """Install rules from a value, an awaitable, or a (possibly async) provider.

        Current rules stay visible to ``check`` while the provider is awaited.
        """
        if callable(rules):
            rules = rules()

        if inspect.isawaitable(rules):
            rules = await rules

        self._install(rules)

    def _reject(self, reason: str) -> None:
        self.logger.warning("Rejected invalid rules", reason=reason)
        if self.metrics:
            self.metrics.record_setup("rejected")
            self.metrics.record_error("invalid_rules")
        raise InvalidRulesError(
            "[Permix]: Permissions in setup are not valid.",
            details={"reason": reason}
        )

    def _install(self, rules: Any) -> None:
        if not validate_rules(rules):
            self._reject("Rules must map entities to actions with boolean or callable values")

        # Reference swap; readers see wholly old or wholly new rules
        self._rules = rules
        first_setup = not self._setup_called
        self._setup_called = True
        # Readiness is only reported where a client is waiting on it
        if self.client_context:
            self._ready = True
        self._gate.resolve()

        self.logger.info(
            "Rules installed",
            entities=sorted(rules.keys()),
            first_setup=first_setup
        )
        if self.metrics:
            self.metrics.record_setup("installed")

        self.hooks.call_hook("setup", rules)
        # Still owed if a setup listener raised on an earlier call
        if not self._ready_fired:
            self._ready_fired = True
            self.hooks.call_hook("ready")

    # Evaluation

    def check(self, entity: EntityT, action: Union[ActionT, ActionSpec], data: Any = None) -> bool:
        """Check if ``action`` is allowed on ``entity`` under the current rules."""
        rules = self._rules

        if self.settings.is_development and (not rules or entity not in rules):
            self.logger.warning(
                "Entity not found. This warning is only shown in development mode.",
                entity=entity
            )

        if self.metrics is None:
            allowed = check_with_rules(rules, entity, action, data)
        else:
            with self.metrics.time_check(str(entity)) as result:
                result["allowed"] = check_with_rules(rules, entity, action, data)
            allowed = result["allowed"]

        self.logger.debug("Permission check", entity=entity, action=action, allowed=allowed)
        return allowed

    async def check_async(self, entity: EntityT, action: Union[ActionT, ActionSpec], data: Any = None) -> bool:
        """Like ``check``, but waits until the first setup has completed.

        Evaluates against the rules current when the wait ends.
        """
        await self._gate.wait()
        return self.check(entity, action, data)

    def is_ready(self) -> bool:
        return self._ready

    async def is_ready_async(self) -> bool:
        await self._gate.wait()
        return self._ready

    def is_setup_called(self) -> bool:
        """True once any setup has succeeded, regardless of client context."""
        return self._setup_called

    def get_rules(self) -> Optional[Rules]:
        """Current rules reference, or None before any setup or hydrate."""
        return self._rules

    def _set_rules(self, rules: Optional[Rules]) -> None:
        self._rules = rules

    # Events

    def hook(self, name: str, fn: Listener) -> Callable[[], None]:
        return self.hooks.hook(name, fn)

    def hook_once(self, name: str, fn: Listener) -> Callable[[], None]:
        return self.hooks.hook_once(name, fn)

    def remove_hook(self, name: str, fn: Listener) -> None:
        self.hooks.remove_hook(name, fn)

    def clear_hook(self, name: str) -> None:
        self.hooks.clear_hook(name)

    def clear_all_hooks(self) -> None:
        self.hooks.clear_all_hooks()

    # Templates and serialization

    def template(self, rules):
        """Validate rules now, install them later via ``setup``."""
        return _template(rules)

    def dehydrate(self) -> StateJSON:
        """Boolean-only projection of the current rules; predicates become False."""
        return dehydrate_rules(self)

    def hydrate(self, state: StateJSON) -> None:
        """Install wire state directly, without validation or setup events."""
        hydrate_rules(self, state)


def create_permix(client_context: Optional[bool] = None, **kwargs) -> Permix:
    """Create a Permix instance."""
    return Permix(client_context=client_context, **kwargs)


def get_rules(instance: Permix) -> Optional[Rules]:
    """Current rules of a validated instance."""
    validate_instance(instance)
    return instance.get_rules()
