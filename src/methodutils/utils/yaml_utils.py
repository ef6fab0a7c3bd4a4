"""YAML helpers"""

import os
import typing as t
from collections import defaultdict

import yaml
from munch import Munch

from methodutils.utils.data_utils import NotSpecified


def yaml_dump_cozy(data, stream=None, **kwargs) -> str:
    """Dump data to YAML, accepting the containers this package hands around.

    - Munch --> regular dict
    - defaultdict --> regular dict
    - tuple --> list

    Args:
        data: Python data structure to dump to YAML
        stream: File-like object to write to (or None to return string)
        **kwargs: Additional arguments passed to yaml.dump()

    Returns:
        YAML string if stream is None, otherwise None

    Example:
        >>> print(yaml_dump_cozy({"m::f()": ("str", "int")}), end="")
        m::f():
        - str
        - int
    """

    class CozyDumper(yaml.SafeDumper):
        """Custom YAML dumper for Munch, defaultdict and tuple."""

    def _represent_as_dict(dumper, data):
        return dumper.represent_dict(dict(data))

    def _represent_tuple(dumper, data: tuple):
        return dumper.represent_list(list(data))

    CozyDumper.add_representer(Munch, _represent_as_dict)
    CozyDumper.add_representer(defaultdict, _represent_as_dict)
    CozyDumper.add_representer(tuple, _represent_tuple)

    kwargs.setdefault("sort_keys", False)
    kwargs.setdefault("allow_unicode", True)
    return yaml.dump(data, stream, Dumper=CozyDumper, **kwargs)


def yaml_safe_load_file(fname: str, default: t.Any = NotSpecified) -> t.Any:
    """Load YAML content from a file safely.

    A missing file yields ``default`` when one is given; any other failure is
    re-raised as RuntimeError.
    """
    if default is not NotSpecified and not os.path.exists(fname):
        return default
    try:
        with open(fname, "r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except Exception as e:
        raise RuntimeError(f"Failed to load YAML file '{fname}': {e}") from e
