import copy

import pytest

CLEAN_RESULT = {
    "date_last_updated": "2024-09-15",
    "vehicle_registration_mark": "SD12LSC",
    "does_vehicle_identification_number_match": True,
    "dvla_manufacturer_desc": "FORD",
    "dvla_model_desc": "FOCUS",
    "dvla_fuel_desc": "PETROL",
    "dvla_body_desc": "5 DOOR HATCHBACK",
    "dvla_transmission_desc": "MANUAL 5 GEARS",
    "number_gears": 5,
    "number_seats": 5,
    "dvla_wheelplan": "2 AXLE RIGID BODY",
    "registration_date": "2018-03-01",
    "manufactured_year": 2018,
    "vehicle_identification_number": "WF0XXXGCDX1234567",
    "first_registration_date": "2018-03-01",
    "used_before_first_registration": False,
    "co2_gkm": 125,
    "engine_capacity_cc": 1600,
    "engine_number": "F16A0001",
    "is_scrapped": False,
    "scrapped_date": None,
    "is_exported": False,
    "exported_date": None,
    "is_imported": False,
    "is_non_eu_import": False,
    "prior_gb_vrm": None,
    "prior_ni_vrm": None,
    "colour": "BLUE",
    "maximum_permissable_mass_kg": 1825,
    "power_weight_ratio_kw_kg": 0.0712,
    "min_kerbweight_kg": 1290,
    "gross_vehicleweight_kg": 1825,
    "max_netpower_kw": 92,
    "max_braked_towing_weight_kg": 1200,
    "max_unbraked_towing_weight_kg": 645,
    "stationary_soundlevel_db": 79,
    "stationary_soundlevel_rpm": 4500,
    "driveby_soundlevel_db": 72,
    "v5c_data_items": [],
    "vehicle_identity_check_items": [],
    "keeper_data_items": [],
    "colour_data_items": [],
    "finance_data_items": [],
    "cherished_data_items": [],
    "condition_data_items": [],
    "stolen_vehicle_data_items": [],
    "high_risk_data_items": [],
    "previous_search_items": [],
    "indemnity_months": 12,
    "indemnity_gbp": 10000,
}

THEFT_CLAIM = {
    "date_last_updated": "2020-01-01",
    "date_of_loss": "2020-01-01",
    "vehicle_status": "VEHICLE HAS BEEN STOLEN",
    "theft_indictor_literal": "STOLEN",
    "insurer_name": "EXAMPLE INSURANCE CO",
    "insurer_contact_number": "01234 567891",
    "insurer_claim_number": "EXAMPLE CLAIM NUMBER",
    "loss_type": "T",
    "theft_indicator": "Y",
    "date_removed": None,
}

STOLEN_REPORT = {
    "date_last_updated": "2020-01-01",
    "date_reported": "2020-01-01",
    "is_stolen": True,
    "police_force": "COUNTY POLICE FORCE",
    "police_force_contact_number": "01234 567891",
}

FINANCE_AGREEMENT = {
    "date_last_updated": "2020-01-01",
    "finance_start_date": "2020-01-01",
    "finance_term_months": 36,
    "finance_type": "HIRE PURCHASE",
    "finance_company": "A FINANCE CO",
    "finance_company_contact_number": "01234 567891",
    "finance_agreement_number": 1234567,
    "financed_vehicle_desc": "FORD FOCUS",
}


@pytest.fixture
def clean_result():
    return copy.deepcopy(CLEAN_RESULT)


@pytest.fixture
def make_response(clean_result):
    def _make(**overrides):
        result = dict(clean_result)
        result.update(copy.deepcopy(overrides))
        return {"success": True, "result": result}

    return _make
