"""Handler type tokens shared by modules and the registry."""

from types import SimpleNamespace
from typing import Dict, Optional


class HandlerType:
    """Opaque token naming a handler role.

    Tokens compare and hash by identity, so two tokens created separately are
    never equal even if they carry the same description. Use ``shared`` to get
    the process-wide token for a key.
    """

    __slots__ = ("description",)

    _shared: Dict[str, "HandlerType"] = {}

    def __init__(self, description: Optional[str] = None):
        self.description = description

    @classmethod
    def shared(cls, key: str) -> "HandlerType":
        """Get (or create) the interned token for ``key``."""
        token = cls._shared.get(key)
        if token is None:
            token = cls(key)
            cls._shared[key] = token
        return token

    def __repr__(self):
        return f"<HandlerType: {self.description or hex(id(self))}>"


LAUNCHER = HandlerType.shared("hazel.type.launcher")
EXECUTOR = HandlerType.shared("hazel.type.executor")
TERMINATOR = HandlerType.shared("hazel.type.terminator")

TYPES = SimpleNamespace(
    launcher=LAUNCHER,
    executor=EXECUTOR,
    terminator=TERMINATOR,
)
