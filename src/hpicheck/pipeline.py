from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hpicheck.config import RiskConfig
from hpicheck.errors import Err, Ok, Result
from hpicheck.models import HpiCheck
from hpicheck.normalizer import normalize
from hpicheck.risk import score_report
from hpicheck.validator import validate_response

logger = logging.getLogger(__name__)


def run_check(response: Mapping[str, Any], config: RiskConfig | None = None) -> Result[HpiCheck]:
    """Validate, normalize and score one decoded HPI response."""
    validated = validate_response(response)
    if isinstance(validated, Err):
        logger.warning("HPI response rejected: %s", validated.error.message)
        return validated

    normalized = normalize(validated.value)
    if isinstance(normalized, Err):
        logger.warning("HPI response malformed: %s", normalized.error.message)
        return normalized

    report = normalized.value
    return Ok(HpiCheck(report=report, risk_summary=score_report(report, config)))
