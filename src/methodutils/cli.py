"""Command-line interface to inspect callables.

Callables are given as ``package.module:Qual.name``.
"""

import importlib
import typing as t

import click

from methodutils.reflection import (
    InvalidCallableError,
    build_identity,
    get_param_names,
    resolve_generic_return_types,
    type_name,
)
from methodutils.utils.yaml_utils import yaml_dump_cozy


def load_target(target: str) -> t.Callable:
    """Import ``package.module:Qual.name`` and return the named object."""
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"expected 'package.module:Qual.name', got {target!r}")
    obj = importlib.import_module(module_name)
    for attr in qualname.split("."):
        obj = getattr(obj, attr)
    return obj


class CallableTarget(click.ParamType):
    """Click parameter type resolving a ``module:qualname`` string to a callable."""

    name = "target"

    def convert(self, value, param, ctx):
        if callable(value):
            return value
        try:
            obj = load_target(value)
        except (ValueError, ImportError, AttributeError) as e:
            self.fail(f"cannot load {value!r}: {e}", param, ctx)
        if not callable(obj):
            self.fail(f"{value!r} is not callable", param, ctx)
        return obj


CALLABLE_TARGET = CallableTarget()


@click.group()
def cli():
    """Inspect identity strings and generic return types of Python callables."""


@cli.command(name="identity")
@click.argument("target", type=CALLABLE_TARGET)
@click.argument("args", nargs=-1)
def cli_command_identity(target, args):
    """Print the identity of TARGET, with ARGS as values when they match its parameters.

    Examples:
        methodutils identity json:dumps
        methodutils identity mypkg.handlers:Handler.handle a 2 true
    """
    try:
        click.echo(build_identity(target, *args))
    except InvalidCallableError as e:
        raise click.UsageError(str(e)) from e


@cli.command(name="params")
@click.argument("target", type=CALLABLE_TARGET)
def cli_command_params(target):
    """Print the formal parameter names of TARGET, one per line."""
    try:
        names = get_param_names(target)
    except InvalidCallableError as e:
        raise click.UsageError(str(e)) from e
    for name in names:
        click.echo(name)


@cli.command(name="generics")
@click.argument("targets", type=CALLABLE_TARGET, nargs=-1, required=True)
def cli_command_generics(targets):
    """Print the generic return type arguments of each TARGET as YAML.

    Examples:
        methodutils generics mypkg.handlers:Handler.handle mypkg.handlers:load_all
    """
    output = {}
    for target in targets:
        try:
            output[build_identity(target)] = [type_name(tp) for tp in resolve_generic_return_types(target)]
        except InvalidCallableError as e:
            raise click.UsageError(str(e)) from e
    click.echo(yaml_dump_cozy(output).strip())


def main():
    """Entry point of the ``methodutils`` script."""
    cli()  # pylint: disable=no-value-for-parameter


# entry point `methodutils` is defined in pyproject.toml
if __name__ == "__main__":
    main()
