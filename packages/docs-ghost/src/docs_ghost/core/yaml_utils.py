from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

INCLUDE_TAG = "!include"


class NavLoader(yaml.SafeLoader):
    """Safe loader for mkdocs configs.

    `!include path` is kept as the plain string `"!include path"`, matching the
    quoted form, and tags the audit does not care about (`!!python/name:...`,
    `!ENV`, ...) are loaded as their untagged value instead of failing.
    """


def _construct_include(loader: NavLoader, node: yaml.Node) -> str:
    return f"{INCLUDE_TAG} {loader.construct_scalar(node)}"


def _construct_untagged(loader: NavLoader, _suffix: str, node: yaml.Node) -> Any:
    if isinstance(node, yaml.ScalarNode):
        return loader.construct_scalar(node)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node, deep=True)
    return loader.construct_mapping(node, deep=True)


NavLoader.add_constructor(INCLUDE_TAG, _construct_include)
NavLoader.add_multi_constructor("tag:yaml.org,2002:python/", _construct_untagged)
NavLoader.add_multi_constructor("!", _construct_untagged)


def load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return yaml.load(f, Loader=NavLoader)


def load_yaml_text(text: str) -> Any:
    return yaml.load(text, Loader=NavLoader)
