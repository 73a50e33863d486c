import pytest

from hpicheck.errors import Err, Ok, ValidationError
from hpicheck.validator import UNSUCCESSFUL_RESPONSE, validate_response


def test_successful_response_unwraps_result(make_response):
    response = make_response()
    outcome = validate_response(response)
    assert isinstance(outcome, Ok)
    assert outcome.ok is True
    assert outcome.value["vehicle_registration_mark"] == "SD12LSC"


def test_result_is_copied_out(make_response):
    response = make_response()
    outcome = validate_response(response)
    outcome.value["keeper_data_items"].append({"number_previous_keepers": 9})
    assert response["result"]["keeper_data_items"] == []


def test_unsuccessful_response_carries_upstream_error():
    outcome = validate_response({"success": False, "error": "VRM not found"})
    assert isinstance(outcome, Err)
    assert outcome.ok is False
    assert isinstance(outcome.error, ValidationError)
    assert outcome.error.message == "VRM not found"


def test_missing_result_uses_generic_message():
    outcome = validate_response({"success": True, "result": None})
    assert isinstance(outcome, Err)
    assert outcome.error.message == UNSUCCESSFUL_RESPONSE


def test_missing_success_flag_is_rejected(clean_result):
    outcome = validate_response({"result": clean_result})
    assert isinstance(outcome, Err)


def test_non_object_result_is_rejected():
    outcome = validate_response({"success": True, "result": ["not", "an", "object"]})
    assert isinstance(outcome, Err)
    assert isinstance(outcome.error, ValidationError)


def test_non_mapping_response_raises():
    with pytest.raises(TypeError):
        validate_response("<html>bad gateway</html>")
