"""Requirement checking entrypoints.

This module knows nothing about argument parsing or output so the same check
can back the CLI and library callers alike.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import Requirement, Settings
from .domains import DomainHandler
from .report import aggregate

logger = logging.getLogger(__name__)


def check_versions(settings: Settings, installed: Mapping[str, str]) -> dict[str, Any]:
    """Check installed versions against every configured requirement.

    Params:
        settings: loaded requirements and the domain their ranges are over
        installed: package name -> installed version string

    Returns: dict report as produced by ``report.aggregate``
    """
    results = [
        _check_requirement(requirement, installed.get(requirement.name), settings.domain)
        for requirement in settings.requirements
    ]
    report = aggregate(results)

    totals = report["totals"]
    logger.info(
        f"Checked {totals['requirements']} requirement(s): {totals['satisfied']} satisfied, "
        f"{totals['unsatisfied']} unsatisfied, {totals['missing']} missing, "
        f"{totals['invalid']} invalid"
    )
    return report


def _check_requirement(
    requirement: Requirement, version: str | None, domain: DomainHandler
) -> dict[str, Any]:
    result: dict[str, Any] = {
        "name": requirement.name,
        "range": str(requirement.ranges),
        "installed": version,
    }

    if version is None:
        logger.warning(f"{requirement.name}: not installed")
        result["status"] = "missing"
        return result

    try:
        value = domain.parse_value(version)
    except (ValueError, OverflowError) as exc:
        logger.warning(f"{requirement.name}: cannot read installed version {version!r}: {exc}")
        result["status"] = "invalid"
        result["error"] = str(exc)
        return result

    if value in requirement.ranges:
        result["status"] = "satisfied"
    else:
        logger.warning(f"{requirement.name}: {version} is outside {requirement.ranges}")
        result["status"] = "unsatisfied"
    return result
