"""Resolve type names to loaded types."""

import ast
import builtins
import importlib
import typing as t

# nodes a type expression such as ``dict[str, mod.Foo]`` or ``Callable[[int], str]`` is built from
TYPE_EXPRESSION_NODES = (ast.Expression, ast.Name, ast.Attribute, ast.Subscript, ast.Tuple, ast.List, ast.Load)


class TypeLoadError(LookupError):
    """Raised when a type name cannot be resolved to a loaded type."""

    def __init__(self, name: str, reason: str = "not found"):
        super().__init__(f"Type {name!r} could not be loaded: {reason}")
        self.name = name


def is_type(obj: t.Any) -> bool:
    """True for classes, parameterized generics such as ``list[int]``, and ``typing.Any``."""
    return isinstance(obj, type) or t.get_origin(obj) is not None or obj is t.Any


def _check_expression(name: str) -> ast.Expression:
    try:
        tree = ast.parse(name.strip(), mode="eval")
    except SyntaxError as e:
        raise TypeLoadError(name, f"invalid syntax: {e.msg}") from e
    for node in ast.walk(tree):
        is_marker = isinstance(node, ast.Constant) and (node.value is None or node.value is Ellipsis)
        if not is_marker and not isinstance(node, TYPE_EXPRESSION_NODES):
            raise TypeLoadError(name, f"not a type expression ({type(node).__name__})")
    return tree


def _evaluate(name: str, tree: ast.Expression, namespace: t.Mapping[str, t.Any]) -> t.Any:
    # only names, attributes and subscripts reach eval, as typing.ForwardRef would evaluate them
    code = compile(tree, f"<type {name}>", "eval")
    return eval(code, {"__builtins__": builtins, **namespace})  # pylint: disable=eval-used


def _import_dotted(name: str) -> t.Any:
    """Import the longest module prefix of ``name`` and walk the remaining attributes."""
    parts = name.strip().split(".")
    for split in range(len(parts), 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj = importlib.import_module(module_name)
        except (ImportError, ValueError):
            continue
        for attr in parts[split:]:
            obj = getattr(obj, attr)
        return obj
    raise TypeLoadError(name, "no importable module prefix")


def load_type(name: str, namespace: t.Mapping[str, t.Any] | None = None) -> t.Any:
    """Return the type named ``name``.

    ``name`` must be a type expression made of names, attributes and
    subscripts. It is first evaluated against ``namespace`` (typically the
    globals of the callable whose annotation mentions it), then tried as a
    dotted path ``package.module.Qual.Name``. The result must be a class or a
    parameterized generic.

    Raises:
        TypeLoadError: For anything that does not resolve to a type, whatever
            the evaluation or import raised on the way.
    """
    if not isinstance(name, str) or not name.strip():
        raise TypeLoadError(str(name), "empty type name")
    tree = _check_expression(name)
    try:
        obj = _evaluate(name, tree, namespace or {})
    except Exception:  # pylint: disable=broad-exception-caught
        try:
            obj = _import_dotted(name)
        except TypeLoadError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise TypeLoadError(name, f"{type(e).__name__}: {e}") from e
    if not is_type(obj):
        raise TypeLoadError(name, f"resolves to {type(obj).__name__}, not a type")
    return obj
