"""Reflective metadata of callables: identity strings and generic return type arguments."""

from .descriptor import CallableDescriptor, FormalParameter, InvalidCallableError, type_name
from .generics import TypeArgumentCache, process_cache, resolve_generic_return_types
from .identity import build_identity, get_param_names
from .type_loader import TypeLoadError, load_type

__all__ = [
    "CallableDescriptor",
    "FormalParameter",
    "InvalidCallableError",
    "TypeArgumentCache",
    "TypeLoadError",
    "build_identity",
    "get_param_names",
    "load_type",
    "process_cache",
    "resolve_generic_return_types",
    "type_name",
]
