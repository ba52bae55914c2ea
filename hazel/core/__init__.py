"""Core system functionality."""

from .constants import EXECUTOR, LAUNCHER, TERMINATOR, TYPES, HandlerType
from .errors import HazelError, InvalidArgument, ModuleNotFound
from .module import Module
from .registry import Registry

__all__ = [
    "Registry",
    "Module",
    "HandlerType",
    "LAUNCHER",
    "EXECUTOR",
    "TERMINATOR",
    "TYPES",
    "HazelError",
    "InvalidArgument",
    "ModuleNotFound",
]
