from __future__ import annotations

import dataclasses
from typing import Any

from hpicheck.models import (
    ConditionData,
    FinanceHistory,
    NormalizedHpiReport,
    RiskData,
    RiskSummary,
)

# Read-only properties that consumers expect alongside the stored fields.
_DERIVED_FLAGS: dict[type, tuple[str, ...]] = {
    FinanceHistory: ("has_outstanding_finance",),
    ConditionData: ("has_insurance_claims", "is_stolen"),
    RiskData: ("has_high_risk_markers",),
}


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_json_dict(value: Any) -> Any:
    """Render domain dataclasses as camelCase JSON-ready structures."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for name in _DERIVED_FLAGS.get(type(value), ()):
            out[camel_case(name)] = getattr(value, name)
        for f in dataclasses.fields(value):
            out[camel_case(f.name)] = to_json_dict(getattr(value, f.name))
        return out
    if isinstance(value, (list, tuple)):
        return [to_json_dict(v) for v in value]
    return value


def report_to_dict(report: NormalizedHpiReport) -> dict[str, Any]:
    return to_json_dict(report)


def risk_summary_to_dict(summary: RiskSummary) -> dict[str, Any]:
    return to_json_dict(summary)
