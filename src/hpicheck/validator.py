from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from hpicheck.errors import Err, Ok, Result, ValidationError

UNSUCCESSFUL_RESPONSE = "OneAuto HPI API returned an unsuccessful response"


def validate_response(response: Mapping[str, Any]) -> Result[dict[str, Any]]:
    """Unwrap the ``result`` payload of a decoded HPI response envelope.

    Failure is returned as ``Err(ValidationError)``. A response that is not a
    mapping at all is a contract violation and raises ``TypeError``.
    """
    if not isinstance(response, Mapping):
        raise TypeError(f"HPI response must be a JSON object, got {type(response).__name__}")

    result = response.get("result")
    if response.get("success") is not True or result is None:
        message = response.get("error") or UNSUCCESSFUL_RESPONSE
        return Err(ValidationError(str(message)))
    if not isinstance(result, Mapping):
        return Err(ValidationError(f"HPI result must be a JSON object, got {type(result).__name__}"))

    return Ok(copy.deepcopy(dict(result)))
