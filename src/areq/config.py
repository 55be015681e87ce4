"""Requirements file loader.

A requirements file names a boundary domain and lists, per package, the
range its installed version must fall in::

    {
      "domain": "semver",
      "requirements": [
        {"name": "left-pad", "range": ">=1.0.0 && <2.0.0"},
        {"name": "lodash", "range": "^4.17.0", "syntax": "npm"}
      ]
    }

The file may be JSON, or YAML when its name ends in ``.yaml``/``.yml``, and
may live at an ``http(s)://`` URL. The document is validated against
``REQUIREMENTS_SCHEMA`` and every range is parsed at load time, so a loaded
``Settings`` never holds an unusable requirement.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
import yaml
from jsonschema import Draft202012Validator
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .domains import DEFAULT_DOMAIN_ID, DomainHandler, UnknownDomainError, get_domain
from .models import PureVersion
from .parsers import semver
from .parsers.expression import RangeSyntaxError
from .ranges import Ranges

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("areq.json")
CONFIG_PATH_ENV_VAR = "AREQ_CONFIG"

SYNTAXES = ("native", "npm")

REQUIREMENTS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "domain": {"type": "string", "minLength": 1},
        "requirements": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "range": {"type": "string"},
                    "syntax": {"enum": list(SYNTAXES)},
                    "description": {"type": "string"},
                },
                "required": ["name", "range"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["requirements"],
    "additionalProperties": False,
}


class ConfigError(RuntimeError):
    """Raised when the requirements file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Requirement:
    """A package and the range its installed version must fall in."""

    name: str
    expression: str
    ranges: Ranges
    syntax: str = "native"
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any], domain: DomainHandler) -> Requirement:
        """Create a Requirement from a schema-valid dictionary, parsing its range."""
        name = data["name"]
        expression = data["range"]
        syntax = data.get("syntax", "native")

        if syntax == "npm":
            if domain.value_type is not PureVersion:
                raise ConfigError(
                    f"Requirement '{name}' uses npm syntax, which needs the semver domain "
                    f"(configured: '{domain.domain_id}')"
                )
            try:
                ranges = semver.to_ranges(expression)
            except ValueError as exc:
                raise ConfigError(f"Requirement '{name}' has an invalid npm range: {exc}") from exc
        else:
            try:
                ranges = Ranges.parse(expression, domain.value_type)
            except RangeSyntaxError as exc:
                problems = "; ".join(str(d) for d in exc.diagnostics)
                raise ConfigError(
                    f"Requirement '{name}' has an invalid range `{expression}`: {problems}"
                ) from exc

        return cls(
            name=name,
            expression=expression,
            ranges=ranges,
            syntax=syntax,
            description=data.get("description", ""),
        )


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    domain: DomainHandler
    requirements: list[Requirement]

    def get_requirement(self, name: str) -> Requirement | None:
        """Return the requirement for the given package, or None if not found."""
        for requirement in self.requirements:
            if requirement.name == name:
                return requirement
        return None


def _resolve_config_source(source: Path | str | None = None) -> str:
    """Resolve the configuration source.

    Priority:
    1. Explicit path or URL argument
    2. AREQ_CONFIG environment variable
    3. Default path (areq.json in the working directory)
    """
    if source is not None:
        return str(source)

    env_source = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_source:
        return env_source

    return str(DEFAULT_CONFIG_PATH)


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, timeout=30)


def _fetch(url: str) -> str:
    try:
        response = _http_get(url)
    except requests.RequestException as exc:  # pragma: no cover - network failure path
        raise ConfigError(f"Failed to fetch configuration from {url}: {exc}") from exc

    if response.status_code != 200:
        raise ConfigError(f"Unexpected status code {response.status_code} fetching {url}")

    return response.text


def _read(source: str) -> str:
    if source.startswith("http://") or source.startswith("https://"):
        logger.debug(f"Fetching configuration: {source}")
        return _fetch(source)

    path = Path(source)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc


def _decode(source: str, content: str) -> Any:
    if source.split("?", 1)[0].endswith((".yaml", ".yml")):
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_document(data: Any) -> None:
    """Validate a decoded requirements document against REQUIREMENTS_SCHEMA.

    Raises:
        ConfigError: listing every schema violation.
    """
    validator = Draft202012Validator(REQUIREMENTS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError("Configuration failed validation:\n" + _format_errors(errors))


def settings_from_dict(data: Any) -> Settings:
    """Build Settings from a decoded requirements document."""
    validate_document(data)

    try:
        domain = get_domain(data.get("domain", DEFAULT_DOMAIN_ID))
    except UnknownDomainError as exc:
        raise ConfigError(str(exc)) from exc

    requirements: list[Requirement] = []
    seen_names: set[str] = set()
    for entry in data["requirements"]:
        requirement = Requirement.from_dict(entry, domain)
        if requirement.name in seen_names:
            raise ConfigError(f"Duplicate requirement: '{requirement.name}'")
        seen_names.add(requirement.name)
        requirements.append(requirement)

    return Settings(domain=domain, requirements=requirements)


def load_settings(source: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON or YAML file, or URL.

    Args:
        source: Optional path or URL. If not provided, uses the AREQ_CONFIG
            env var or falls back to areq.json.

    Returns:
        A Settings object with every requirement's range parsed.

    Raises:
        ConfigError: If the source cannot be read or contains invalid data.
    """
    resolved = _resolve_config_source(source)
    data = _decode(resolved, _read(resolved))
    settings = settings_from_dict(data)
    logger.info(
        f"Loaded {len(settings.requirements)} requirement(s) over "
        f"{settings.domain.display_name.lower()} from {resolved}"
    )
    return settings
