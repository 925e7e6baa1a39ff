"""Named connections and statements.

A :class:`NamedHandleRegistry` gives live handles a name so that code can
refer to ``"reporting"`` or ``"active_users"`` instead of threading handle
objects around, and run them in a single call.
"""

from typing import TYPE_CHECKING, Any, Optional, Union

from flexbind.config import FlexBindConfig
from flexbind.driver import Connection, PreparedStatement
from flexbind.exceptions import ImproperConfigurationError, NotFoundError
from flexbind.utils.logging import get_logger
from flexbind.utils.type_guards import is_dbapi_connection

if TYPE_CHECKING:
    from flexbind.callbacks import CallbackChain

__all__ = ("Handle", "NamedHandleRegistry")

logger = get_logger("registry")

Handle = Union[Connection, PreparedStatement]


class NamedHandleRegistry:
    """Explicit mapping from a name to a :class:`Connection` or :class:`PreparedStatement`."""

    __slots__ = ("_handles", "config")

    def __init__(self, config: Optional[FlexBindConfig] = None) -> None:
        self._handles: dict[str, Handle] = {}
        self.config = config

    def register(self, name: str, handle: Any) -> Handle:
        """Associate ``name`` with a handle, replacing any previous one.

        Args:
            name: Name to register under.
            handle: A :class:`Connection`, a :class:`PreparedStatement`, or an
                open DB-API connection, which is wrapped in a :class:`Connection`.

        Raises:
            ImproperConfigurationError: If ``handle`` is none of the above.

        Returns:
            The registered handle.
        """
        if not name:
            msg = "Handle name cannot be empty"
            raise ImproperConfigurationError(msg)
        if isinstance(handle, (Connection, PreparedStatement)):
            registered: Handle = handle
        elif is_dbapi_connection(handle):
            registered = Connection(handle, self.config)
        else:
            msg = f"A connection or statement handle was expected for {name!r}, not {type(handle).__name__}"
            raise ImproperConfigurationError(msg)
        self._handles[name] = registered
        logger.debug("Registered %s as %r", type(registered).__name__, name)
        return registered

    def unregister(self, name: str) -> Optional[Handle]:
        return self._handles.pop(name, None)

    def get(self, name: str) -> Handle:
        """Return the handle registered as ``name``.

        Raises:
            NotFoundError: If nothing is registered under ``name``.
        """
        try:
            return self._handles[name]
        except KeyError:
            msg = f"No handle registered as {name!r}"
            raise NotFoundError(msg) from None

    def connection(self, name: str) -> Connection:
        handle = self.get(name)
        if not isinstance(handle, Connection):
            msg = f"{name!r} is a statement, not a connection"
            raise ImproperConfigurationError(msg)
        return handle

    def statement(self, name: str) -> PreparedStatement:
        handle = self.get(name)
        if not isinstance(handle, PreparedStatement):
            msg = f"{name!r} is a connection, not a statement"
            raise ImproperConfigurationError(msg)
        return handle

    def query(self, name: str, *args: Any, callbacks: "CallbackChain" = (), **kwargs: Any) -> "list[Any]":
        """Run the named handle and fetch its whole result set.

        For a connection the first argument is the SQL (or a prepared
        statement) and the rest are bindings. For a statement every argument
        is a binding; statements without placeholders run with none.
        """
        handle = self.get(name)
        if isinstance(handle, Connection):
            if not args:
                msg = f"A statement is required to query connection {name!r}"
                raise ImproperConfigurationError(msg)
            method = getattr(handle, handle.config.proxy_fetch)
            return method(*args, callbacks=callbacks, **kwargs)

        if handle.param_count:
            handle.execute(*args, **kwargs)
        else:
            handle.execute()
        method = getattr(handle, handle.config.proxy_fetch)
        return method(callbacks)

    def names(self) -> "list[str]":
        return list(self._handles)

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._handles)
