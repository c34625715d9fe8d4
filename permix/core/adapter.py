"""
Framework-neutral base for integrations that attach an instance to a context.

An integration supplies two callbacks: one storing an instance on its own
context object (a request, a session, an RPC call) and one reading it back.
Everything else, creating the instance, installing rules and checking, is
shared here.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar, Union

from shared.errors import PermixNotFoundError
from shared.logging import get_logger
from .engine import Permix
from .models import ActionSpec, Rules
from .template import templator

ContextT = TypeVar("ContextT")

RulesCallback = Callable[[ContextT], Union[Rules, Awaitable[Rules]]]


@dataclass(frozen=True)
class PermixView:
    """Restricted view of an instance: checking only."""
    check: Callable[..., bool]
    check_async: Callable[..., Awaitable[bool]]


def create_forbidden_context(context: Dict[str, Any], entity: str, action: ActionSpec) -> Dict[str, Any]:
    """Context for reporting a denied check, with actions normalized to a list."""
    return {
        **context,
        "entity": entity,
        "actions": [action] if isinstance(action, str) else list(action),
    }


class PermixAdapter(Generic[ContextT]):
    """Shared setup/get/check logic for context-scoped instances."""

    def __init__(
        self,
        set_permix: Callable[[ContextT, Permix], None],
        get_permix: Callable[[ContextT], Optional[Permix]],
        **permix_options: Any,
    ):
        self.logger = get_logger("permix.adapter")
        self._set_permix = set_permix
        self._get_permix = get_permix
        self._permix_options = permix_options
        self.template = templator()

    def get(self, context: ContextT) -> PermixView:
        """Instance attached to ``context``, exposing ``check``/``check_async``."""
        permix = self._get_permix(context)

        if permix is None:
            self.logger.error("Permix not found on context")
            raise PermixNotFoundError()

        return PermixView(check=permix.check, check_async=permix.check_async)

    async def setup_function(self, context: ContextT, callback: RulesCallback) -> None:
        """Attach a fresh instance to ``context`` and install ``callback(context)``."""
        permix = Permix(**self._permix_options)
        self._set_permix(context, permix)

        rules = callback(context)
        if inspect.isawaitable(rules):
            rules = await rules

        permix.setup(rules)

    def check_function(self, context: ContextT, entity: str, action: ActionSpec, data: Any = None) -> bool:
        return self.get(context).check(entity, action, data)


def create_permix_adapter(
    set_permix: Callable[[ContextT, Permix], None],
    get_permix: Callable[[ContextT], Optional[Permix]],
    **permix_options: Any,
) -> PermixAdapter[ContextT]:
    """Create the base adapter that framework integrations build on."""
    return PermixAdapter(set_permix, get_permix, **permix_options)
