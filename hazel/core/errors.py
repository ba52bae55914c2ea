"""Exceptions raised inside the core and delivered to the error sink."""

from typing import Any, Optional


class HazelError(Exception):
    """Base exception for registry errors."""
    pass


class InvalidArgument(HazelError, TypeError):
    """Raised when a name, type, target, option or priority has the wrong shape."""
    pass


class ModuleNotFound(HazelError, LookupError):
    """Raised when a module, or one of its handlers, is not registered."""

    def __init__(self, module_name: Any, handler_type: Optional[Any] = None):
        self.module_name = module_name
        self.handler_type = handler_type
        if handler_type is None:
            message = f"Module not found: {module_name!r}"
        else:
            message = f"Handler not found: {module_name!r} ({handler_type!r})"
        super().__init__(message)
