"""
Rule templates defined ahead of any instance.
"""

from typing import Any, Callable, TypeVar, Union

from shared.errors import InvalidRulesError
from shared.logging import get_logger
from .models import Rules
from .validation import validate_rules

P = TypeVar("P")

logger = get_logger("permix.template")


def _validate(rules: Any) -> None:
    if not validate_rules(rules):
        logger.warning("Rejected invalid template rules")
        raise InvalidRulesError("[Permix]: Permissions in template are not valid.")


def template(rules: Union[Rules, Callable[[P], Rules]]) -> Callable[..., Rules]:
    """Define permissions in one place and set them up later.

    Static rules are validated immediately and a zero-argument producer is
    returned. A rule-building function is wrapped in a one-argument producer
    that validates each result::

        admin_permissions = template({"post": {"create": True, "read": False}})
        permix.setup(admin_permissions())

        by_role = template(lambda user: {"post": {"create": user["role"] == "admin"}})
        permix.setup(by_role({"role": "admin"}))
    """
    if callable(rules):
        build = rules

        def produce_from(param: P) -> Rules:
            result = build(param)
            _validate(result)
            return result

        return produce_from

    _validate(rules)

    def produce() -> Rules:
        return rules

    return produce


def templator() -> Callable[..., Callable[..., Rules]]:
    """Return ``template``; lets callers bind entity/action types in one place."""
    return template
