"""Manage package configuration loading and access."""

import os
import typing as t
from functools import lru_cache
from pathlib import Path

from munch import Munch, munchify

from methodutils.utils.data_utils import NotSpecified, get_multi, merge_struct
from methodutils.utils.yaml_utils import yaml_safe_load_file

DEFAULT_CONFIG_PATH = str(Path(__file__).with_name("config.yaml"))


def _load_config(config_path: str, must_exist: bool = True, merge_into: dict = None) -> Munch[str, t.Any]:
    config_dict = yaml_safe_load_file(config_path, **({} if must_exist else {"default": {}})) or {}
    if merge_into is not None:
        config_dict = merge_struct(merge_into, config_dict)
    return munchify(config_dict)


@lru_cache
def load_config() -> Munch[str, t.Any]:
    config = _load_config(DEFAULT_CONFIG_PATH)
    if config_override_path := os.getenv("PYMETHODUTILS_CONFIG_OVERRIDE"):
        config = _load_config(config_override_path, merge_into=config)
    else:
        config_override_path = str(Path.home() / ".pymethodutils_config_override.yaml")
        config = _load_config(config_override_path, merge_into=config, must_exist=False)
    return config


def get_config(datapath: str | None = None, default: t.Any = NotSpecified) -> t.Any:
    config = load_config()
    return get_multi(config, datapath, default) if datapath else config
