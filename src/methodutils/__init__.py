"""pymethodutils: identity strings and memoized generic return types of Python callables."""

from methodutils.reflection import (
    CallableDescriptor,
    InvalidCallableError,
    TypeArgumentCache,
    TypeLoadError,
    build_identity,
    get_param_names,
    load_type,
    resolve_generic_return_types,
)

__all__ = [
    "CallableDescriptor",
    "InvalidCallableError",
    "TypeArgumentCache",
    "TypeLoadError",
    "build_identity",
    "get_param_names",
    "load_type",
    "resolve_generic_return_types",
]
