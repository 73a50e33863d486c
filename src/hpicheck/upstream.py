from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)


class _UpstreamModel(BaseModel):
    # OneAuto sends explicit nulls for fields it has no data for; treat them
    # as absent so field defaults apply.
    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# ── List item records ───────────────────────────────────────────────

class V5cItem(_UpstreamModel):
    date_v5c_issued: StrictStr = ""


class IdentityCheckItem(_UpstreamModel):
    date_of_vehicle_identity_check: StrictStr = ""
    result_of_vehicle_identity_check: StrictStr = ""


class KeeperItem(_UpstreamModel):
    date_last_updated: StrictStr = ""
    number_previous_keepers: StrictInt = 0
    date_of_last_keeper_change: StrictStr = ""


class ColourItem(_UpstreamModel):
    date_last_updated: StrictStr = ""
    number_previous_colours: StrictInt = 0
    date_of_last_colour_change: StrictStr = ""
    last_colour: StrictStr = ""


class FinanceItem(_UpstreamModel):
    date_last_updated: StrictStr = ""
    finance_start_date: StrictStr = ""
    finance_term_months: StrictInt = 0
    finance_type: StrictStr = ""
    finance_company: StrictStr = ""
    finance_company_contact_number: StrictStr = ""
    finance_agreement_number: StrictInt = 0
    financed_vehicle_desc: StrictStr = ""


class CherishedItem(_UpstreamModel):
    cherished_plate_transfer_date: StrictStr = ""
    previous_vehicle_registration_mark: StrictStr = ""
    date_of_receipt: StrictStr = ""
    transfer_type: StrictStr = ""
    current_vehicle_registration_mark: StrictStr = ""


class ConditionItem(_UpstreamModel):
    date_last_updated: StrictStr = ""
    date_of_loss: StrictStr = ""
    vehicle_status: StrictStr = ""
    theft_indictor_literal: StrictStr = ""  # sic, upstream spelling
    date_of_miaftr_entry: StrictStr = ""
    insurer_name: StrictStr = ""
    insurer_contact_number: StrictStr = ""
    insurer_claim_number: StrictStr = ""
    loss_type: StrictStr = ""
    theft_indicator: StrictStr = ""
    date_removed: StrictStr | None = None


class StolenVehicleItem(_UpstreamModel):
    date_last_updated: StrictStr = ""
    date_reported: StrictStr = ""
    is_stolen: StrictBool = False
    police_force: StrictStr = ""
    police_force_contact_number: StrictStr = ""


class HighRiskItem(_UpstreamModel):
    date_last_updated: StrictStr = ""
    date_of_interest: StrictStr = ""
    registration_period: StrictInt = 0
    high_risk_type: StrictStr = ""
    extra_information: StrictStr = ""
    company_name: StrictStr = ""
    company_contact_number: StrictStr = ""
    company_contact_reference: StrictStr = ""


class PreviousSearchItem(_UpstreamModel):
    date_of_search: StrictStr = ""
    time_of_search: StrictStr = ""
    business_type_searching: StrictStr = ""


# ── Flat record ─────────────────────────────────────────────────────

class UpstreamHpiRecord(_UpstreamModel):
    """The flat ``result`` object of a OneAuto HPI response."""

    date_last_updated: StrictStr = ""
    vehicle_registration_mark: StrictStr = Field(min_length=1)
    vehicle_identification_number: StrictStr = Field(min_length=1)
    does_vehicle_identification_number_match: StrictBool = False

    dvla_manufacturer_desc: StrictStr = ""
    dvla_model_desc: StrictStr = ""
    dvla_fuel_desc: StrictStr = ""
    dvla_body_desc: StrictStr = ""
    dvla_transmission_desc: StrictStr = ""
    number_gears: StrictInt = 0
    number_seats: StrictInt = 0
    dvla_wheelplan: StrictStr = ""
    registration_date: StrictStr = ""
    manufactured_year: StrictInt = 0
    first_registration_date: StrictStr = ""
    used_before_first_registration: StrictBool = False
    co2_gkm: StrictInt = 0
    engine_capacity_cc: StrictInt = 0
    engine_number: StrictStr = ""
    colour: StrictStr = ""

    is_scrapped: StrictBool = False
    scrapped_date: StrictStr | None = None
    is_exported: StrictBool = False
    exported_date: StrictStr | None = None
    is_imported: StrictBool = False
    is_non_eu_import: StrictBool = False
    prior_gb_vrm: StrictStr | None = None
    prior_ni_vrm: StrictStr | None = None

    maximum_permissable_mass_kg: StrictInt = 0
    power_weight_ratio_kw_kg: StrictFloat = 0.0
    min_kerbweight_kg: StrictInt = 0
    gross_vehicleweight_kg: StrictInt = 0
    max_netpower_kw: StrictFloat = 0.0
    max_braked_towing_weight_kg: StrictInt = 0
    max_unbraked_towing_weight_kg: StrictInt = 0
    stationary_soundlevel_db: StrictFloat = 0.0
    stationary_soundlevel_rpm: StrictInt = 0
    driveby_soundlevel_db: StrictFloat = 0.0

    v5c_data_items: list[V5cItem] = Field(default_factory=list)
    vehicle_identity_check_items: list[IdentityCheckItem] = Field(default_factory=list)
    keeper_data_items: list[KeeperItem] = Field(default_factory=list)
    colour_data_items: list[ColourItem] = Field(default_factory=list)
    finance_data_items: list[FinanceItem] = Field(default_factory=list)
    cherished_data_items: list[CherishedItem] = Field(default_factory=list)
    condition_data_items: list[ConditionItem] = Field(default_factory=list)
    stolen_vehicle_data_items: list[StolenVehicleItem] = Field(default_factory=list)
    high_risk_data_items: list[HighRiskItem] = Field(default_factory=list)
    previous_search_items: list[PreviousSearchItem] = Field(default_factory=list)

    indemnity_months: StrictInt = 0
    indemnity_gbp: StrictFloat = 0.0
