"""Memoized generic type arguments of callables' return annotations.

Reflective inspection of a return annotation (and the imports it may trigger)
is paid once per callable. Results are kept in an unbounded, process-wide
cache keyed by the callable's bare identity (see
:func:`methodutils.reflection.identity.build_identity`), so the cache is meant
for a closed set of callables such as reflectively invoked handlers. Entries
are never evicted.

Concurrent first use is serialized per key: for a given callable exactly one
thread introspects, every other thread waits for that key only and then reads
the cached tuple. Callables with different keys never wait on each other.

Type arguments that cannot be loaded are skipped with a warning, so a result
may be shorter than the declared argument list; an empty tuple means either a
non-generic return type or that no argument could be loaded.

Only type arguments count: the metadata of ``Annotated`` and the values of
``Literal`` are ignored, ``Callable`` parameter lists are flattened and
``...`` is dropped.
"""

import ast
import inspect
import typing as t

from methodutils.reflection.descriptor import CallableDescriptor
from methodutils.reflection.identity import build_identity
from methodutils.reflection.type_loader import TypeLoadError, load_type
from methodutils.utils.keyed_lock import KeyedLocks
from methodutils.utils.log_utils import get_logger

logger = get_logger(__name__)

TypeLoader = t.Callable[[str, t.Mapping[str, t.Any]], t.Any]


def _elements(node: ast.expr) -> list[ast.expr]:
    return list(node.elts) if isinstance(node, ast.Tuple) else [node]


def _form(node: ast.expr) -> str:
    """Unqualified name of a subscripted form: ``t.Literal`` -> ``Literal``."""
    return ast.unparse(node).rpartition(".")[2]


def type_argument_names(annotation: str) -> list[str]:
    """Return the source text of each type argument of a string annotation.

    ``Annotated`` contributes its first argument only, ``Literal`` holds values
    and contributes nothing, ``Callable`` parameter lists are flattened and
    ``...`` is left out.

    >>> type_argument_names("dict[str, list[Foo]]")
    ['str', 'list[Foo]']
    >>> type_argument_names("Callable[[int, Foo], str]")
    ['int', 'Foo', 'str']
    >>> type_argument_names("Foo")
    []
    """
    try:
        node = ast.parse(annotation.strip(), mode="eval").body
    except SyntaxError:
        return []
    while isinstance(node, ast.Subscript) and _form(node.value) == "Annotated":
        node = _elements(node.slice)[0]
    if not isinstance(node, ast.Subscript) or _form(node.value) == "Literal":
        return []
    names = []
    for element in _elements(node.slice):
        if isinstance(element, ast.List):
            names.extend(ast.unparse(item) for item in element.elts)
        elif not (isinstance(element, ast.Constant) and element.value is Ellipsis):
            names.append(ast.unparse(element))
    return names


def type_arguments(annotation: t.Any) -> list[t.Any]:
    """Return the type arguments of an evaluated annotation, with the same rules as :func:`type_argument_names`."""
    while t.get_origin(annotation) is t.Annotated:
        annotation = t.get_args(annotation)[0]
    if t.get_origin(annotation) is t.Literal:
        return []
    arguments = []
    for argument in t.get_args(annotation):
        if isinstance(argument, list):
            arguments.extend(argument)
        elif argument is not Ellipsis:
            arguments.append(argument)
    return arguments


class TypeArgumentCache:
    """Per-callable cache of resolved generic return type arguments."""

    def __init__(self, loader: TypeLoader = load_type):
        self._loader = loader
        self._cache: dict[str, tuple[t.Any, ...]] = {}
        self._locks = KeyedLocks()

    def resolve(self, func: t.Any) -> tuple[t.Any, ...]:
        """Return the resolved type arguments of the return annotation of ``func``.

        Raises:
            InvalidCallableError: If ``func`` cannot be introspected.
        """
        descriptor = CallableDescriptor.of(func)
        key = build_identity(descriptor)

        # dict reads are atomic; the check under the lock below is the authoritative one
        if (cached := self._cache.get(key)) is not None:
            return cached

        with self._locks(key):
            if (cached := self._cache.get(key)) is not None:
                return cached
            result = tuple(self._introspect(descriptor))
            self._cache[key] = result
            return result

    def _introspect(self, descriptor: CallableDescriptor) -> list[t.Any]:
        annotation = descriptor.return_annotation
        if annotation is inspect.Signature.empty:
            return []
        if isinstance(annotation, t.ForwardRef):
            annotation = annotation.__forward_arg__
        if isinstance(annotation, str):
            arguments: t.Sequence[t.Any] = type_argument_names(annotation)
        else:
            arguments = type_arguments(annotation)

        resolved = []
        for argument in arguments:
            try:
                resolved.append(self._load(argument, descriptor.namespace))
            except TypeLoadError as e:
                logger.warning("%s::%s: skipping return type argument: %s", descriptor.declaring_type, descriptor.name, e)
        return resolved

    def _load(self, argument: t.Any, namespace: t.Mapping[str, t.Any]) -> t.Any:
        if isinstance(argument, t.ForwardRef):
            argument = argument.__forward_arg__
        if isinstance(argument, str):
            return self._loader(argument, namespace)
        if isinstance(argument, t.TypeVar):
            raise TypeLoadError(argument.__name__, "unbound type variable")
        return argument

    def __contains__(self, func: t.Any) -> bool:
        return build_identity(func) in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def snapshot(self) -> dict[str, tuple[t.Any, ...]]:
        """Copy of the cached identity -> type arguments mapping."""
        return dict(self._cache)


_PROCESS_CACHE = TypeArgumentCache()


def resolve_generic_return_types(func: t.Any) -> tuple[t.Any, ...]:
    """Return the generic type arguments of the return annotation of ``func``, via the process-wide cache.

    Example:
        >>> def pairs() -> dict[str, int]: ...
        >>> resolve_generic_return_types(pairs)
        (<class 'str'>, <class 'int'>)
    """
    return _PROCESS_CACHE.resolve(func)


def process_cache() -> TypeArgumentCache:
    """The process-wide cache behind :func:`resolve_generic_return_types`."""
    return _PROCESS_CACHE
