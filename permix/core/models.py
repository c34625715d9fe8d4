"""
Rule data models for Permix.
"""

from typing import Any, Awaitable, Callable, Dict, Mapping, Sequence, TypeVar, Union

from pydantic import StrictBool, TypeAdapter

# Wildcard action: AND over every action currently defined for the entity
ALL_ACTIONS = "all"

EntityT = TypeVar("EntityT", bound=str)
ActionT = TypeVar("ActionT", bound=str)

Predicate = Callable[[Any], Any]
RuleValue = Union[bool, Predicate]

# entity -> action -> bool | predicate
Rules = Mapping[str, Mapping[str, RuleValue]]

# entity -> action -> bool; the serializable projection of Rules
StateJSON = Dict[str, Dict[str, bool]]

RulesProvider = Callable[[], Union[Rules, Awaitable[Rules]]]
RulesOrProvider = Union[Rules, RulesProvider, Awaitable[Rules]]

# single action, several actions, or ALL_ACTIONS
ActionSpec = Union[str, Sequence[str]]

# Strict booleans only: "true", 1 and friends are rejected on the wire
state_json_adapter: TypeAdapter = TypeAdapter(Dict[str, Dict[str, StrictBool]])
