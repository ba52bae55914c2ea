"""Hazel: a registry for pluggable, typed module handlers."""

from .core import (
    EXECUTOR,
    LAUNCHER,
    TERMINATOR,
    TYPES,
    HandlerType,
    HazelError,
    InvalidArgument,
    Module,
    ModuleNotFound,
    Registry,
)

__version__ = "1.0.0"

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
