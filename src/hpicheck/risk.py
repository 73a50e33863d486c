from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from hpicheck.config import RiskConfig
from hpicheck.models import NormalizedHpiReport, RiskSummary, RiskTier


@dataclass(frozen=True)
class RiskFactors:
    is_stolen: bool = False
    is_write_off: bool = False
    is_scrapped: bool = False
    has_outstanding_finance: bool = False
    is_exported: bool = False
    has_high_risk_markers: bool = False
    has_insurance_claims: bool = False
    previous_keepers: int = 0


@dataclass(frozen=True)
class RiskRule:
    predicate: Callable[[RiskFactors, RiskConfig], bool]
    weight: int
    label: Callable[[RiskFactors], str]


# Evaluated in order; warnings come out most severe first.
RISK_RULES: tuple[RiskRule, ...] = (
    RiskRule(lambda f, _: f.is_stolen, 100, lambda _: "VEHICLE REPORTED STOLEN"),
    RiskRule(lambda f, _: f.is_write_off, 80, lambda _: "INSURANCE WRITE-OFF"),
    RiskRule(lambda f, _: f.is_scrapped, 90, lambda _: "VEHICLE SCRAPPED"),
    RiskRule(lambda f, _: f.has_outstanding_finance, 50, lambda _: "OUTSTANDING FINANCE"),
    RiskRule(lambda f, _: f.is_exported, 40, lambda _: "EXPORTED FROM UK"),
    RiskRule(lambda f, _: f.has_high_risk_markers, 35, lambda _: "HIGH RISK MARKERS PRESENT"),
    RiskRule(lambda f, _: f.has_insurance_claims, 25, lambda _: "INSURANCE CLAIMS HISTORY"),
    RiskRule(
        lambda f, cfg: f.previous_keepers > cfg.max_previous_keepers,
        15,
        lambda f: f"HIGH NUMBER OF PREVIOUS OWNERS ({f.previous_keepers})",
    ),
)


def risk_factors(report: NormalizedHpiReport) -> RiskFactors:
    condition = report.condition_data
    is_write_off = condition.has_insurance_claims and any(
        "STOLEN" in claim.status or claim.loss_type == "T" for claim in condition.claims
    )
    return RiskFactors(
        is_stolen=condition.is_stolen,
        is_write_off=is_write_off,
        is_scrapped=report.legal_status.is_scrapped,
        has_outstanding_finance=report.finance_history.has_outstanding_finance,
        is_exported=report.legal_status.is_exported,
        has_high_risk_markers=report.risk_data.has_high_risk_markers,
        has_insurance_claims=condition.has_insurance_claims,
        previous_keepers=report.ownership_history.number_of_previous_keepers,
    )


def classify_score(score: int, config: RiskConfig | None = None) -> tuple[RiskTier, str]:
    cfg = config or RiskConfig()
    if score >= cfg.high_risk_threshold:
        return "HIGH", cfg.high_risk_action
    if score >= cfg.medium_risk_threshold:
        return "MEDIUM", cfg.medium_risk_action
    return "LOW", cfg.low_risk_action


def score_risk(factors: RiskFactors, config: RiskConfig | None = None) -> RiskSummary:
    # Scores are additive and not capped; only the tier saturates.
    cfg = config or RiskConfig()
    score = 0
    warnings: list[str] = []
    for rule in RISK_RULES:
        if rule.predicate(factors, cfg):
            score += rule.weight
            warnings.append(rule.label(factors))

    tier, action = classify_score(score, cfg)
    return RiskSummary(
        overall_risk=tier,
        score=score,
        is_stolen=factors.is_stolen,
        has_outstanding_finance=factors.has_outstanding_finance,
        is_write_off=factors.is_write_off,
        is_exported=factors.is_exported,
        is_scrapped=factors.is_scrapped,
        has_insurance_claims=factors.has_insurance_claims,
        has_high_risk_markers=factors.has_high_risk_markers,
        recommended_action=action,
        warning_flags=tuple(warnings),
    )


def score_report(report: NormalizedHpiReport, config: RiskConfig | None = None) -> RiskSummary:
    return score_risk(risk_factors(report), config)
