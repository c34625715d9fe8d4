"""
Dehydration and hydration of rules across a process or transport boundary.

Dehydrating projects the current rules to their boolean-only wire form:
boolean actions pass through and predicates become False. The projection is
lossy and one-directional; hydrated booleans never turn back into predicates.

Hydrating installs a wire state directly as the current rules. It skips the
setup pipeline: no validation, no ``setup``/``ready`` events, and the
readiness gate is left as it was. Only the ``hydrate`` event fires.
"""

from typing import Union

from pydantic import ValidationError

from shared.errors import InvalidRulesError, NotReadyError
from shared.logging import get_logger
from .models import StateJSON, state_json_adapter
from .validation import validate_instance

logger = get_logger("permix.hydration")


def dehydrate_rules(instance) -> StateJSON:
    """Boolean-only projection of the current rules of ``instance``.

    Requires at least one successful ``setup``; an instance that was only
    hydrated raises NotReadyError. So ``hydrate(dehydrate(p))`` followed by
    ``dehydrate`` reproduces the same state only on an instance that has
    been set up.
    """
    if not instance.is_setup_called():
        if instance.metrics:
            instance.metrics.record_error("not_ready")
        raise NotReadyError()

    rules = instance.get_rules() or {}
    state: StateJSON = {}
    for entity, actions in rules.items():
        state[entity] = {
            action: False if callable(value) else bool(value)
            for action, value in actions.items()
        }

    return state


def hydrate_rules(instance, state: StateJSON) -> None:
    # Copied per entity so later changes to the caller's dict do not leak in
    rules = {entity: dict(actions) for entity, actions in state.items()}
    instance._set_rules(rules)

    logger.info("State hydrated", entities=sorted(rules.keys()))
    if instance.metrics:
        instance.metrics.record_hydration()

    instance.hooks.call_hook("hydrate")


def dehydrate(instance) -> StateJSON:
    """Get the current rules of ``instance`` in JSON-serializable form.

    Example::

        permix.setup({"post": {"create": True, "delete": lambda post: not post.published}})
        dehydrate(permix)  # {"post": {"create": True, "delete": False}}

    Raises NotReadyError until ``setup`` has succeeded once; hydrating alone
    does not count.
    """
    validate_instance(instance)
    return dehydrate_rules(instance)


def hydrate(instance, state: StateJSON) -> None:
    """Install a dehydrated state on ``instance``."""
    validate_instance(instance)
    hydrate_rules(instance, state)


def dehydrate_json(instance) -> str:
    """Dehydrate ``instance`` to a JSON document."""
    state = dehydrate(instance)
    return state_json_adapter.dump_json(state).decode("utf-8")


def hydrate_json(instance, payload: Union[str, bytes]) -> None:
    """Hydrate ``instance`` from a JSON document produced by ``dehydrate_json``.

    The payload must be entity -> action -> strict boolean; anything else
    raises InvalidRulesError and leaves the instance untouched.
    """
    validate_instance(instance)

    try:
        state = state_json_adapter.validate_json(payload)
    except ValidationError as e:
        logger.warning("Rejected invalid state payload", errors=e.error_count())
        raise InvalidRulesError(
            "[Permix]: Dehydrated state is not valid.",
            details={"errors": e.errors(include_url=False)}
        ) from e

    hydrate_rules(instance, state)
