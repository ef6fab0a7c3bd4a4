"""Inspectable view of a Python callable.

:class:`CallableDescriptor` gathers what identity building and return type
introspection need from a callable: the name of the type (or module) that
declares it, its own name, its formal parameters with their declared type
names, and its raw return annotation.
"""

import inspect
import sys
import typing as t
from dataclasses import dataclass, field

from methodutils.config import get_config

RECEIVER_NAMES = ("self", "cls")


class InvalidCallableError(TypeError):
    """Raised when a value cannot be introspected as a callable."""


class FormalParameter(t.NamedTuple):
    """A formal parameter: its name and the name of its declared type."""

    name: str
    type_name: str


def signature_of(func: t.Callable) -> inspect.Signature:
    """Return ``inspect.signature(func)``, tolerating annotations naming undefined types."""
    try:
        return inspect.signature(func)
    except NameError:
        # deferred annotations (Python 3.14+) are evaluated by inspect, undefined names raise
        import annotationlib  # pylint: disable=import-outside-toplevel

        return inspect.signature(func, annotation_format=annotationlib.Format.FORWARDREF)


def type_name(annotation: t.Any) -> str:
    """Render an annotation the way Python names types.

    >>> type_name(str), type_name(list[int]), type_name("Foo")
    ('str', 'list[int]', 'Foo')
    """
    if annotation is inspect.Parameter.empty:
        return str(get_config("identity.untyped", "typing.Any"))
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, t.ForwardRef):
        return annotation.__forward_arg__
    if annotation is None or annotation is type(None):
        return "None"
    # list[int] passes isinstance(..., type) on Python 3.10
    if isinstance(annotation, type) and t.get_origin(annotation) is None:
        if annotation.__module__ == "builtins":
            return annotation.__qualname__
        return f"{annotation.__module__}.{annotation.__qualname__}"
    return repr(annotation)


def _declared_in_class(qualname: str) -> bool:
    owner = qualname.rpartition(".")[0]
    return bool(owner) and not owner.endswith("<locals>")


def _is_staticmethod(func: t.Any, qualname: str) -> bool:
    """True if ``func`` is a staticmethod of a class reachable from its module."""
    owner_path, _, name = qualname.rpartition(".")
    if "<locals>" in owner_path.split("."):
        return False
    owner = sys.modules.get(getattr(func, "__module__", None) or "")
    for attr in owner_path.split("."):
        owner = getattr(owner, attr, None)
    if not isinstance(owner, type):
        return False
    try:
        return isinstance(inspect.getattr_static(owner, name), staticmethod)
    except AttributeError:
        return False


@dataclass(frozen=True)
class CallableDescriptor:
    """Reflective metadata of one callable."""

    declaring_type: str
    name: str
    parameters: tuple[FormalParameter, ...]
    return_annotation: t.Any = inspect.Signature.empty
    namespace: dict[str, t.Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def of(cls, func: t.Any) -> "CallableDescriptor":
        """Describe ``func``.

        Raises:
            InvalidCallableError: ``func`` is None, not callable, unnamed, or its
                signature cannot be introspected.
        """
        if func is None:
            raise InvalidCallableError("callable must not be None")
        if isinstance(func, CallableDescriptor):
            return func
        if not callable(func):
            raise InvalidCallableError(f"{func!r} is not callable")
        qualname = getattr(func, "__qualname__", None)
        name = getattr(func, "__name__", None)
        if not isinstance(qualname, str) or not isinstance(name, str):
            raise InvalidCallableError(f"{func!r} has no qualified name")
        try:
            signature = signature_of(func)
        except (ValueError, TypeError) as e:
            raise InvalidCallableError(f"Cannot introspect signature of {qualname}: {e}") from e

        params = list(signature.parameters.values())
        if not inspect.ismethod(func) and _declared_in_class(qualname) and params:
            if params[0].name in RECEIVER_NAMES and not _is_staticmethod(func, qualname):
                params = params[1:]

        module = getattr(func, "__module__", None) or "<unknown>"
        owner = qualname.rpartition(".")[0]
        return cls(
            declaring_type=f"{module}.{owner}" if owner else module,
            name=name,
            parameters=tuple(FormalParameter(p.name, type_name(p.annotation)) for p in params),
            return_annotation=signature.return_annotation,
            namespace=_namespace_of(func, module),
        )


def _namespace_of(func: t.Any, module: str) -> dict[str, t.Any]:
    """Globals against which the annotations of ``func`` are resolved."""
    namespace = getattr(func, "__globals__", None)
    if isinstance(namespace, dict):
        return namespace
    if (mod := sys.modules.get(module)) is not None:
        return vars(mod)
    return {}
