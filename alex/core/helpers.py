"""Session helpers and the fallback lookups that reach them.

Helpers are convenience callables available to code typed into a session
without being defined in the captured context. They are only consulted when
normal name resolution fails, so a name defined by the host always wins.
"""

import builtins
import importlib
import inspect
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, MutableMapping, Optional


class HelperRegistry(Mapping):
    """Read-only mapping from helper name to callable."""

    def __init__(self, helpers: Optional[Mapping[str, Callable[..., Any]]] = None):
        helpers = dict(helpers or {})
        for name, helper in helpers.items():
            if not callable(helper):
                raise TypeError(f"Helper {name!r} is not callable")
        self._helpers = MappingProxyType(helpers)

    @classmethod
    def from_object(cls, obj: Any) -> "HelperRegistry":
        """Collect the public callables of a module, class or instance."""
        return cls({
            name: member
            for name, member in inspect.getmembers(obj, callable)
            if not name.startswith("_") and not inspect.isclass(member)
        })

    @classmethod
    def from_module(cls, dotted_path: str) -> "HelperRegistry":
        """Import ``dotted_path`` and collect the callables it defines."""
        module = importlib.import_module(dotted_path)
        return cls({
            name: member
            for name, member in vars(module).items()
            if not name.startswith("_")
            and inspect.isfunction(member)
            and member.__module__ == module.__name__
        })

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self._helpers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._helpers)

    def __len__(self) -> int:
        return len(self._helpers)

    def __repr__(self) -> str:
        return f"HelperRegistry({sorted(self._helpers)})"


class HelperNamespace(MutableMapping):
    """
    Locals mapping handed to ``eval``/``exec`` during a session.

    Reads and writes go to the captured locals. A name that is not a local,
    global or builtin falls back to the helper registry while ``is_active()``
    is true; otherwise ``KeyError`` lets the interpreter raise its usual
    ``NameError``.
    """

    def __init__(
        self,
        local_vars: MutableMapping[str, Any],
        global_vars: Dict[str, Any],
        helpers: Mapping[str, Callable[..., Any]],
        is_active: Callable[[], bool],
    ):
        self._locals = local_vars
        self._globals = global_vars
        self._helpers = helpers
        self._is_active = is_active

    def _resolves_normally(self, name: str) -> bool:
        if name in self._globals:
            return True
        namespace = self._globals.get("__builtins__", builtins)
        if not isinstance(namespace, dict):
            namespace = vars(namespace)
        return name in namespace

    def __getitem__(self, name: str) -> Any:
        try:
            return self._locals[name]
        except KeyError:
            pass
        if not self._resolves_normally(name) and self._is_active() and name in self._helpers:
            return self._helpers[name]
        raise KeyError(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self._locals[name] = value

    def __delitem__(self, name: str) -> None:
        del self._locals[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._locals)

    def __len__(self) -> int:
        return len(self._locals)

    def __contains__(self, name: object) -> bool:
        return name in self._locals


class HelperDispatch:
    """
    Mixin for host classes that want helpers reachable as attributes.

    ``obj.actor(0)`` on an instance without an ``actor`` attribute calls the
    ``actor`` helper while a session is running. The innermost running
    session supplies the helpers, whether it is the default instance or one
    the host constructed itself.
    """

    def __getattr__(self, name: str) -> Any:
        # Only called once normal attribute lookup has failed
        if not name.startswith("__"):
            from .repl import Session

            session = Session.current()
            if session is not None and name in session.helpers:
                return session.helpers[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
