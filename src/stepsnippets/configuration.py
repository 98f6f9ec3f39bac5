"""
Configuration loading for snippet generation environments.

An environment configuration is a YAML mapping with a ``contexts`` list::

    contexts:
      - name: FeatureContext
        accepts_snippets: true
        accepted_snippet_type: regex
        declared_methods: [iHaveABasket]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional, Union

import yaml

from .models import ContextEnvironment


def _parse_scalar(value: str) -> object:
    lowered = value.lower()
    if lowered in {"true", "yes"}:
        return True
    if lowered in {"false", "no"}:
        return False
    if lowered in {"null", "none"}:
        return None
    if value.isdigit():
        return int(value)
    return value


def parse_override_value(raw: str) -> object:
    """
    Parse a command-line override string into a Python value.

    JSON lists and objects are decoded, so ``declared_methods=["a", "b"]`` sets a list.

    :param raw: Raw override string.
    :type raw: str
    :return: Parsed value.
    :rtype: object
    """
    stripped = str(raw).strip()
    if not stripped:
        return ""
    if stripped[0] in {"{", "["}:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return stripped
    return _parse_scalar(stripped)


def parse_dotted_overrides(pairs: Optional[List[str]]) -> Dict[str, object]:
    """
    Parse repeated key=value pairs into a dotted override mapping.

    :param pairs: Repeated command-line pairs such as ``contexts.0.accepts_snippets=true``.
    :type pairs: list[str] or None
    :return: Override mapping.
    :rtype: dict[str, object]
    :raises ValueError: If a pair is not key=value or has an empty key.
    """
    overrides: Dict[str, object] = {}
    for item in pairs or []:
        if "=" not in item:
            raise ValueError(f"Overrides must be key=value (got {item!r})")
        key, raw = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override keys must be non-empty")
        overrides[key] = parse_override_value(raw)
    return overrides


def _child(container: Union[MutableMapping[str, Any], List[Any]], part: str) -> Any:
    if isinstance(container, list):
        index = int(part)
        while len(container) <= index:
            container.append({})
        if not isinstance(container[index], (dict, list)):
            container[index] = {}
        return container[index]
    existing = container.get(part)
    if not isinstance(existing, (dict, list)):
        existing = {}
        container[part] = existing
    return existing


def _set_dotted_key(target: MutableMapping[str, Any], dotted_key: str, value: object) -> None:
    parts = [part.strip() for part in dotted_key.split(".") if part.strip()]
    if not parts:
        raise ValueError("Override keys must be non-empty")
    current: Any = target
    for part in parts[:-1]:
        if isinstance(current, list) and not part.isdigit():
            raise ValueError(f"Override key {dotted_key!r} indexes a list with {part!r}")
        current = _child(current, part)
    last = parts[-1]
    if isinstance(current, list):
        if not last.isdigit():
            raise ValueError(f"Override key {dotted_key!r} indexes a list with {last!r}")
        index = int(last)
        while len(current) <= index:
            current.append(None)
        current[index] = value
    else:
        current[last] = value


def apply_dotted_overrides(
    config: Mapping[str, Any], overrides: Mapping[str, object]
) -> Dict[str, Any]:
    """
    Apply dotted key overrides to a configuration mapping.

    Numeric key segments address list items, so ``contexts.1.name`` renames the second context.

    :param config: Base configuration mapping.
    :type config: Mapping[str, Any]
    :param overrides: Dotted key override mapping.
    :type overrides: Mapping[str, object]
    :return: New configuration mapping with overrides applied.
    :rtype: dict[str, Any]
    :raises ValueError: If a key indexes a list with a non-numeric segment.
    """
    updated: Dict[str, Any] = json.loads(json.dumps(dict(config)))
    for key, value in overrides.items():
        _set_dotted_key(updated, key, value)
    return updated


def _merge(base: Dict[str, Any], layer: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in layer.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            merged[key] = _merge(existing, value)
        else:
            merged[key] = value
    return merged


def load_environment_configuration(configuration_paths: Iterable[str]) -> Dict[str, Any]:
    """
    Load and compose environment configuration files.

    Later files override earlier ones; nested mappings merge key by key and lists are replaced.

    :param configuration_paths: Configuration file paths in precedence order.
    :type configuration_paths: Iterable[str]
    :return: Composed configuration mapping.
    :rtype: dict[str, Any]
    :raises FileNotFoundError: If any configuration file is missing.
    :raises ValueError: If any configuration file is not a mapping.
    """
    composed: Dict[str, Any] = {}
    for raw in configuration_paths:
        path = Path(raw)
        if not path.is_file():
            raise FileNotFoundError(f"Environment configuration not found: {path}")
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if data is None:
            continue
        if not isinstance(data, dict):
            raise ValueError(f"Environment configuration must be a mapping: {path}")
        composed = _merge(composed, data)
    return composed


def environment_from_configuration(configuration: Mapping[str, Any]) -> ContextEnvironment:
    """
    Build a context environment from a configuration mapping.

    :param configuration: Configuration mapping with a ``contexts`` list.
    :type configuration: Mapping[str, Any]
    :return: Validated context environment.
    :rtype: ContextEnvironment
    :raises ValueError: If ``contexts`` is not a list.
    :raises pydantic.ValidationError: If a context entry is invalid.
    """
    contexts = configuration.get("contexts") or []
    if not isinstance(contexts, list):
        raise ValueError("Environment configuration 'contexts' must be a list")
    return ContextEnvironment.model_validate({"context_classes": contexts})
