"""Registry that owns modules and dispatches their handlers."""

import asyncio
import contextvars
import inspect
import logging
import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Set

from .constants import EXECUTOR, TYPES, HandlerType
from .errors import HazelError, InvalidArgument, ModuleNotFound
from .module import Module, check_handler_type, check_priority

logger = logging.getLogger(__name__)

ERROR_MODULE = "error"

# Registry whose error handler is running in the current context
_reporting = contextvars.ContextVar("hazel_reporting", default=None)


def _check_name(name: Any) -> str:
    if not isinstance(name, str):
        raise InvalidArgument(
            f"Name of the module must be a string, received {type(name).__name__}"
        )
    return name


class Registry:
    """Owns every module and exposes registration, lookup and dispatch.

    Public operations never raise on bad arguments or failing handlers. They
    report failure through their return value and hand the exception to
    ``error``, which delegates to the executor of a module named ``"error"``
    when one is registered and logs it otherwise.
    """

    types = TYPES

    def __init__(self, config: Optional[Mapping] = None):
        """
        Initialize the registry.

        Args:
            config: Configuration mapping, kept as given and visible to
                handlers through ``registry.config``

        Raises:
            InvalidArgument: If config is not a mapping
        """
        if config is None:
            config = {}
        if not isinstance(config, Mapping):
            raise InvalidArgument(
                f"Config must be a mapping, received {type(config).__name__}"
            )
        self.config = config
        self.modules: Dict[str, Module] = {}
        self._pending: Set[asyncio.Task] = set()

    @classmethod
    def from_config_file(cls, config_path: Optional[str] = None) -> "Registry":
        """Create a registry configured from a YAML file."""
        from hazel.config import load_config
        return cls(load_config(config_path))

    def setting(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key."""
        from hazel.config import get
        return get(self.config, key, default)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def set(self, name: str, target: Callable, options: Optional[Mapping] = None) -> bool:
        """
        Bind a handler to a new or existing module.

        Args:
            name: Module name
            target: Handler, called as ``target(registry, *args)``
            options: Optional mapping with ``type`` (default EXECUTOR) and
                ``priority`` (default infinity)

        Returns:
            True if the handler was bound
        """
        try:
            _check_name(name)
            if not callable(target):
                raise InvalidArgument(
                    f"Target function must be callable, received {type(target).__name__}"
                )
            if options is None:
                options = {}
            if not isinstance(options, Mapping):
                raise InvalidArgument(
                    f"Options must be a mapping, received {type(options).__name__}"
                )
            handler_type = options.get("type")
            if handler_type is None:
                handler_type = EXECUTOR
            priority = options.get("priority")
            if priority is None:
                priority = math.inf
            check_handler_type(handler_type)
            check_priority(priority)

            module = self.modules.get(name)
            if module is None:
                module = Module(name)
                self.modules[name] = module
                logger.debug(f"Created module: {name}")
            module.set_handler(handler_type, target)
            module.set_priority(handler_type, priority)
        except HazelError as e:
            self.error(e)
            return False

        logger.debug(f"Bound {handler_type!r} handler to module {name} (priority={priority})")
        return True

    def delete(self, name: str, handler_type: Optional[HandlerType] = None) -> bool:
        """
        Remove one handler from a module, or the whole module.

        Args:
            name: Module name
            handler_type: Handler type to remove. When omitted the module
                itself is removed.

        Returns:
            True if the removal succeeded
        """
        try:
            _check_name(name)
            if handler_type is not None:
                check_handler_type(handler_type)
            module = self.modules.get(name)
            if module is None:
                raise ModuleNotFound(name)
        except HazelError as e:
            self.error(e)
            return False

        if handler_type is None:
            del self.modules[name]
            logger.debug(f"Removed module: {name}")
        else:
            module.delete_handler(handler_type)
            logger.debug(f"Removed {handler_type!r} handler from module {name}")
        return True

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def has(self, name: str, handler_type: Optional[HandlerType] = None) -> bool:
        """
        Check whether a module (or one of its handlers) is registered.

        Without a handler type, a module only counts as present while it
        holds at least one handler.
        """
        try:
            _check_name(name)
            if handler_type is not None:
                check_handler_type(handler_type)
        except HazelError as e:
            self.error(e)
            return False

        module = self.modules.get(name)
        if module is None:
            return False
        if handler_type is None:
            return len(module) > 0
        return module.has_handler(handler_type)

    def get(self, name: str) -> Optional[Module]:
        """Get a module by name."""
        return self.modules.get(name)

    def get_priority(self, name: str, handler_type: Optional[HandlerType] = None) -> Optional[float]:
        """Get the priority a module recorded for a handler type."""
        if handler_type is None:
            handler_type = EXECUTOR
        try:
            _check_name(name)
            check_handler_type(handler_type)
            module = self.modules.get(name)
            if module is None:
                raise ModuleNotFound(name)
            return module.get_priority(handler_type)
        except HazelError as e:
            self.error(e)
            return None

    def get_module_info(self) -> List[Dict[str, Any]]:
        """Get information about all modules."""
        return [
            {
                "name": m.name,
                "types": m.types(),
                "priority": {t: m.get_priority(t) for t in m.types()},
            }
            for m in self.modules.values()
        ]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def run(self, name: str, handler_type: Optional[HandlerType] = None, *args, **kwargs) -> Any:
        """
        Run one handler of one module.

        Args:
            name: Module name
            handler_type: Handler type (default EXECUTOR)
            *args: Arguments passed after the registry

        Returns:
            The handler's (awaited) result, or None if it could not be run
        """
        if handler_type is None:
            handler_type = EXECUTOR
        try:
            _check_name(name)
            check_handler_type(handler_type)
            module = self.modules.get(name)
            if module is None:
                raise ModuleNotFound(name)
            handler = module.get_handler(handler_type)
            if handler is None:
                raise ModuleNotFound(name, handler_type)
        except HazelError as e:
            self.error(e)
            return None

        try:
            result = handler(self, *args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            self.error(e)
            return None

    async def traverse(self, handler_type: HandlerType, *args, **kwargs) -> bool:
        """
        Run the handlers of a type across all modules, in priority order.

        Handlers run one after another; each is awaited before the next one
        starts. Equal priorities keep module registration order. A failing
        handler is reported and the traversal carries on.

        Returns:
            True once every handler has been run, False on a bad type
        """
        try:
            check_handler_type(handler_type)
        except HazelError as e:
            self.error(e)
            return False

        queue = [
            (module.name, module.get_handler(handler_type), module.get_priority(handler_type))
            for module in self.modules.values()
            if module.has_handler(handler_type)
        ]
        queue.sort(key=lambda entry: entry[2])

        for name, handler, _ in queue:
            try:
                result = handler(self, *args, **kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.debug(f"{handler_type!r} handler of module {name} failed: {e}")
                self.error(e)

        return True

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def error(self, err: Any):
        """
        Report an error.

        Values that are not exceptions are replaced by an InvalidArgument
        describing them. The error goes to the executor of the ``"error"``
        module when there is one, and to the log otherwise.
        Errors raised while that executor is itself running are logged
        instead of being handed back to it.
        """
        if not isinstance(err, BaseException):
            err = InvalidArgument(
                f"Error must be an exception, received {type(err).__name__}: {err!r}"
            )

        module = self.modules.get(ERROR_MODULE)
        handler = module.get_handler(EXECUTOR) if module is not None else None
        if handler is None or _reporting.get() is self:
            logger.error(f"Unhandled error: {err}", exc_info=err)
            return

        token = _reporting.set(self)
        try:
            result = handler(self, err)
        except Exception as e:
            self._error_handler_failed(err, e)
            return
        finally:
            _reporting.reset(token)

        if inspect.isawaitable(result):
            self._settle(err, result)

    def _settle(self, err: BaseException, awaitable):
        async def _wait():
            _reporting.set(self)
            try:
                await awaitable
            except Exception as e:
                self._error_handler_failed(err, e)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # private loop, the caller's current loop stays installed
            loop = asyncio.new_event_loop()
            try:
                loop.run_until_complete(_wait())
                loop.run_until_complete(loop.shutdown_asyncgens())
            finally:
                loop.close()
            return

        task = loop.create_task(_wait())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _error_handler_failed(self, err: BaseException, failure: BaseException):
        logger.error(f"Error handler failed: {failure}", exc_info=failure)
        logger.error(f"Unhandled error: {err}", exc_info=err)

    async def wait_for_errors(self):
        """Wait until asynchronous error handlers have finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def __repr__(self):
        return f"<Registry: {len(self.modules)} modules>"
