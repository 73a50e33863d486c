from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RiskConfig:
    high_risk_threshold: int = 70
    medium_risk_threshold: int = 30
    max_previous_keepers: int = 5  # more than this adds a warning
    high_risk_action: str = "AVOID PURCHASE - Serious issues detected"
    medium_risk_action: str = "PROCEED WITH CAUTION - Additional checks recommended"
    low_risk_action: str = "ACCEPTABLE RISK - Standard checks apply"
