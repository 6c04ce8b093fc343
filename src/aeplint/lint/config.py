# SPDX-License-Identifier: MIT
"""Layered configuration — which rules apply to which files.

A configuration is an ordered sequence of layers: built-in defaults, the
user's config file, then the CLI enable and disable layers. Inside a layer
the longest matching rule prefix decides; across layers the last applicable
layer that says anything about the rule wins.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from aeplint.lint.errors import ConfigParseError
from aeplint.lint.names import ALL, RuleName, RuleNamePrefix

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AEPLINT_CONFIG"


def match_path(pattern: str, path: str) -> bool:
    """Shell-glob match over slash-separated segments.

    ``*``, ``?`` and ``[...]`` never cross a ``/``; a ``**`` segment matches
    zero or more whole segments.
    """
    return _match_segments(_normalize(pattern).split("/"), _normalize(path).split("/"))


def _normalize(path: str) -> str:
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path


def _match_segments(patterns: list[str], parts: list[str]) -> bool:
    if not patterns:
        return not parts
    head, rest = patterns[0], patterns[1:]
    if head == "**":
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))
    if not parts:
        return False
    return fnmatch.fnmatchcase(parts[0], head) and _match_segments(rest, parts[1:])


class ConfigLayer(BaseModel):
    """One configuration entry, as written in a config file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    included_paths: tuple[str, ...] = ()
    excluded_paths: tuple[str, ...] = ()
    enabled_rules: tuple[str, ...] = ()
    disabled_rules: tuple[str, ...] = ()

    @field_validator("enabled_rules", "disabled_rules")
    @classmethod
    def validate_prefixes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for item in value:
            RuleNamePrefix.parse(item)
        return value

    @model_validator(mode="after")
    def reject_conflicts(self) -> ConfigLayer:
        # Two matching prefixes of equal length are the same prefix.
        enabled = {str(p) for p in self.enabled_prefixes}
        conflicts = sorted(enabled & {str(p) for p in self.disabled_prefixes})
        if conflicts:
            msg = f"rules both enabled and disabled in the same entry: {', '.join(conflicts)}"
            raise ValueError(msg)
        return self

    @property
    def enabled_prefixes(self) -> tuple[RuleNamePrefix, ...]:
        return tuple(RuleNamePrefix.parse(p) for p in self.enabled_rules)

    @property
    def disabled_prefixes(self) -> tuple[RuleNamePrefix, ...]:
        return tuple(RuleNamePrefix.parse(p) for p in self.disabled_rules)

    def applies_to(self, path: str) -> bool:
        if self.included_paths and not any(match_path(p, path) for p in self.included_paths):
            return False
        return not any(match_path(p, path) for p in self.excluded_paths)

    def rule_state(self, rule_name: RuleName) -> bool | None:
        """Return True/False from the longest matching prefix, or None if nothing matches."""
        best: RuleNamePrefix | None = None
        state: bool | None = None
        for prefixes, enabled in ((self.enabled_prefixes, True), (self.disabled_prefixes, False)):
            for prefix in prefixes:
                if not prefix.matches(rule_name):
                    continue
                if best is None or prefix.specificity > best.specificity:
                    best, state = prefix, enabled
        return state


@dataclass(frozen=True)
class ConfigSequence:
    """Ordered, append-only configuration layers; later layers take precedence."""

    layers: tuple[ConfigLayer, ...] = ()

    def append(self, *layers: ConfigLayer) -> ConfigSequence:
        return ConfigSequence((*self.layers, *layers))

    def is_rule_enabled(self, file_path: str, rule_name: RuleName | str) -> bool:
        return is_enabled(file_path, rule_name, self)

    def __iter__(self) -> Iterator[ConfigLayer]:
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)


DEFAULT_LAYERS: tuple[ConfigLayer, ...] = (ConfigLayer(enabled_rules=(ALL,)),)


def is_enabled(file_path: str, rule_name: RuleName | str, configs: Iterable[ConfigLayer]) -> bool:
    """Resolve whether ``rule_name`` runs on ``file_path``. Rules are enabled by default."""
    name = RuleName.parse(rule_name)
    enabled = True
    for layer in configs:
        if not layer.applies_to(file_path):
            continue
        state = layer.rule_state(name)
        if state is not None:
            enabled = state
    return enabled


def _error_summary(exc: ValidationError) -> list[str]:
    errors: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<entry>"
        errors.append(f"{loc}: {err['msg']}")
    return errors


def parse_layers(data: Any, source: str) -> list[ConfigLayer]:
    """Validate decoded config data (a list of mappings) into layers.

    Raises:
        ConfigParseError: If the data is not a list of valid layer mappings.
    """
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigParseError(source, [f"expected a list of entries, got {type(data).__name__}"])
    layers: list[ConfigLayer] = []
    errors: list[str] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            errors.append(f"[{index}]: expected a mapping, got {type(entry).__name__}")
            continue
        try:
            layers.append(ConfigLayer.model_validate(entry))
        except ValidationError as exc:
            errors.extend(f"[{index}].{e}" for e in _error_summary(exc))
    if errors:
        raise ConfigParseError(source, errors)
    return layers


def load_config_file(path: str | Path) -> list[ConfigLayer]:
    """Read layers from a ``.yaml``/``.yml`` or ``.json`` file.

    Raises:
        ConfigParseError: On unreadable files, unknown extensions, syntax errors
            or invalid entries. No layer from a bad file is ever returned.
    """
    path = Path(path)
    source = str(path)
    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise ConfigParseError(source, [f"unsupported config file extension {suffix!r}"])
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigParseError(source, [str(exc)]) from exc
    try:
        data = json.loads(text) if suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigParseError(source, [f"syntax error: {exc}"]) from exc
    layers = parse_layers(data, source)
    log.debug("Loaded %d config entries from %s", len(layers), source)
    return layers


def build_config_sequence(
    config_path: str | Path | None = None,
    enabled_rules: Iterable[str] = (),
    disabled_rules: Iterable[str] = (),
    *,
    defaults: Iterable[ConfigLayer] = DEFAULT_LAYERS,
) -> ConfigSequence:
    """Defaults, then the config file (CLI path > AEPLINT_CONFIG env > none), then CLI layers.

    Raises:
        ConfigParseError: If the file or any CLI rule prefix is invalid.
    """
    configs = ConfigSequence(tuple(defaults))
    path = config_path or os.environ.get(CONFIG_ENV_VAR) or None
    if path:
        configs = configs.append(*load_config_file(path))
    enabled = list(enabled_rules)
    disabled = list(disabled_rules)
    if enabled:
        configs = configs.append(*parse_layers([{"enabled_rules": enabled}], "--enable-rule"))
    if disabled:
        configs = configs.append(*parse_layers([{"disabled_rules": disabled}], "--disable-rule"))
    return configs
