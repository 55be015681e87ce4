"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

STATUSES = ("satisfied", "unsatisfied", "missing", "invalid")
FAILING_STATUSES = frozenset({"unsatisfied", "invalid"})


def aggregate(results: list[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate per-requirement results into a single report.

    Each entry of ``results`` carries at least ``name`` and ``status``, where
    status is one of ``STATUSES``. Missing packages are counted but do not
    make the report fail.
    """

    totals = {"requirements": len(results)}
    for status in STATUSES:
        totals[status] = sum(1 for r in results if r.get("status") == status)

    report: dict[str, Any] = {
        "version": "1",
        "hasFailures": any(r.get("status") in FAILING_STATUSES for r in results),
        "results": results,
        "totals": totals,
    }

    return report
