"""Per-module handler storage."""

import logging
import math
from numbers import Real
from typing import Any, Callable, Dict, List, Optional

from .constants import HandlerType
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


def check_handler_type(value: Any) -> HandlerType:
    """Return ``value`` if it is a handler type token, raise otherwise."""
    if not isinstance(value, HandlerType):
        raise InvalidArgument(
            f"Type of the function must be a HandlerType, received {type(value).__name__}"
        )
    return value


def check_priority(value: Any) -> float:
    """Return ``value`` if it can be used as a priority, raise otherwise."""
    # bool is a Real subclass but never a meaningful priority
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(
            f"Priority must be a number, received {type(value).__name__}"
        )
    if math.isnan(value):
        raise InvalidArgument("Priority must not be NaN")
    return value


class Module:
    """A named bundle of handlers, one per handler type, with their priorities."""

    def __init__(self, name: str):
        """
        Initialize the module.

        Args:
            name: Module name (unique identifier inside a registry)

        Raises:
            InvalidArgument: If name is not a string
        """
        if not isinstance(name, str):
            raise InvalidArgument(
                f"Name of the module must be a string, received {type(name).__name__}"
            )
        self._name = name
        self.handlers: Dict[HandlerType, Callable] = {}
        self.priority: Dict[HandlerType, float] = {}

    @property
    def name(self) -> str:
        """Module name."""
        return self._name

    def set_handler(self, handler_type: HandlerType, fn: Callable) -> bool:
        """
        Bind a handler to a type, replacing any existing one.

        Args:
            handler_type: Handler type token
            fn: Handler callable

        Returns:
            True once the handler is stored

        Raises:
            InvalidArgument: If handler_type is not a token or fn is not callable
        """
        check_handler_type(handler_type)
        if not callable(fn):
            raise InvalidArgument(
                f"Target function must be callable, received {type(fn).__name__}"
            )
        if handler_type in self.handlers:
            logger.debug(f"Replacing {handler_type!r} handler of module {self._name}")
        self.handlers[handler_type] = fn
        return True

    def get_handler(self, handler_type: HandlerType) -> Optional[Callable]:
        """Get the handler for a type, or None if there is none."""
        return self.handlers.get(handler_type)

    def has_handler(self, handler_type: HandlerType) -> bool:
        """Check whether a handler is bound to a type."""
        return handler_type in self.handlers

    def delete_handler(self, handler_type: HandlerType) -> bool:
        """Remove the handler for a type. Removing a missing handler is fine."""
        self.handlers.pop(handler_type, None)
        return True

    def set_priority(self, handler_type: HandlerType, value: float) -> bool:
        """
        Record the priority of a handler type. Lower values run first.

        Raises:
            InvalidArgument: If handler_type is not a token or value is not a
                usable number
        """
        check_handler_type(handler_type)
        self.priority[handler_type] = check_priority(value)
        return True

    def get_priority(self, handler_type: HandlerType) -> float:
        """Get the priority of a handler type, infinity when none was set."""
        check_handler_type(handler_type)
        return self.priority.get(handler_type, math.inf)

    def types(self) -> List[HandlerType]:
        """Handler types currently bound in this module."""
        return list(self.handlers)

    def __len__(self):
        return len(self.handlers)

    def __repr__(self):
        return f"<Module: {self._name} ({len(self.handlers)} handlers)>"
