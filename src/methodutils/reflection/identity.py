"""Identity strings of callables and their invocations."""

import typing as t

from methodutils.config import get_config
from methodutils.reflection.descriptor import CallableDescriptor


def render_value(value: t.Any) -> str:
    """Textual form of a runtime argument; None becomes the configured null token."""
    if value is None:
        return str(get_config("identity.null_token", "null"))
    return str(value)


def build_identity(func: t.Any, *args: t.Any) -> str:
    """Return the identity of ``func``, annotated with ``args`` when they match its parameters.

    The result has the form ``module.Owner::name(p1:T1=v1,p2:T2=v2)``. Values are
    appended to every parameter when exactly one argument per formal parameter
    is given, and to none otherwise, so ``build_identity(func)`` is the bare
    signature of ``func``.

    Args:
        func: The callable (or an already built :class:`CallableDescriptor`).
        *args: Runtime arguments, in parameter order.

    Returns:
        The identity string.

    Raises:
        InvalidCallableError: If ``func`` cannot be introspected.

    Example:
        >>> class Owner:
        ...     def method(self, p1: str, p2: int, p3: bool): ...
        >>> build_identity(Owner.method, "a", 2, True).split("::")[1]
        'method(p1:str=a,p2:int=2,p3:bool=True)'
    """
    descriptor = CallableDescriptor.of(func)
    with_values = len(args) == len(descriptor.parameters)

    entries = []
    for i, param in enumerate(descriptor.parameters):
        entry = f"{param.name}:{param.type_name}"
        if with_values:
            entry += f"={render_value(args[i])}"
        entries.append(entry)

    separator = str(get_config("identity.separator", ","))
    return f"{descriptor.declaring_type}::{descriptor.name}({separator.join(entries)})"


def get_param_names(func: t.Any) -> list[str]:
    """Return the formal parameter names of ``func`` in declaration order, receiver omitted."""
    return [param.name for param in CallableDescriptor.of(func).parameters]
