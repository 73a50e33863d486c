from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

import pydantic

from hpicheck.errors import Err, MalformedFieldError, Ok, Result
from hpicheck.models import (
    CherishedTransfer,
    ColourChanges,
    ConditionData,
    DocumentHistory,
    FinanceAgreement,
    FinanceHistory,
    HighRiskMarker,
    IdentityCheck,
    Insurance,
    InsuranceClaim,
    LegalStatus,
    NormalizedHpiReport,
    OwnershipHistory,
    PreviousSearch,
    RiskData,
    StolenVehicleReport,
    TechnicalSpecs,
    V5cIssue,
    VehicleInfo,
)
from hpicheck.upstream import ColourItem, KeeperItem, UpstreamHpiRecord

logger = logging.getLogger(__name__)


def parse_record(payload: Mapping[str, Any]) -> Result[UpstreamHpiRecord]:
    try:
        return Ok(UpstreamHpiRecord.model_validate(dict(payload)))
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field_path = ".".join(str(part) for part in first["loc"]) or "result"
        return Err(MalformedFieldError(field_path, first["msg"]))


def normalize(payload: Mapping[str, Any]) -> Result[NormalizedHpiReport]:
    parsed = parse_record(payload)
    if isinstance(parsed, Err):
        return parsed
    return Ok(build_report(parsed.value))


def build_report(rec: UpstreamHpiRecord) -> NormalizedHpiReport:
    return NormalizedHpiReport(
        vehicle_info=_vehicle_info(rec),
        legal_status=_legal_status(rec),
        technical_specs=_technical_specs(rec),
        document_history=_document_history(rec),
        ownership_history=_ownership_history(rec),
        finance_history=_finance_history(rec),
        cherished_transfers=_cherished_transfers(rec),
        condition_data=_condition_data(rec),
        risk_data=_risk_data(rec),
        search_history=_search_history(rec),
        insurance=Insurance(indemnity_months=rec.indemnity_months, indemnity_value_gbp=rec.indemnity_gbp),
    )


def _vehicle_info(rec: UpstreamHpiRecord) -> VehicleInfo:
    return VehicleInfo(
        registration=rec.vehicle_registration_mark,
        vin=rec.vehicle_identification_number,
        vin_match=rec.does_vehicle_identification_number_match,
        make=rec.dvla_manufacturer_desc,
        model=rec.dvla_model_desc,
        colour=rec.colour,
        fuel_type=rec.dvla_fuel_desc,
        body_type=rec.dvla_body_desc,
        transmission=rec.dvla_transmission_desc,
        gears=rec.number_gears,
        seats=rec.number_seats,
        engine_capacity=rec.engine_capacity_cc,
        engine_number=rec.engine_number,
        co2_emissions=rec.co2_gkm,
        manufactured_year=rec.manufactured_year,
        registration_date=rec.registration_date,
        first_registration_date=rec.first_registration_date,
        used_before_first_reg=rec.used_before_first_registration,
    )


def _legal_status(rec: UpstreamHpiRecord) -> LegalStatus:
    # Event dates only mean something when the matching flag is set.
    return LegalStatus(
        is_scrapped=rec.is_scrapped,
        scrapped_date=rec.scrapped_date if rec.is_scrapped else None,
        is_exported=rec.is_exported,
        exported_date=rec.exported_date if rec.is_exported else None,
        is_imported=rec.is_imported,
        is_non_eu_import=rec.is_non_eu_import,
        prior_gb_vrm=rec.prior_gb_vrm,
        prior_ni_vrm=rec.prior_ni_vrm,
    )


def _technical_specs(rec: UpstreamHpiRecord) -> TechnicalSpecs:
    return TechnicalSpecs(
        wheelplan=rec.dvla_wheelplan,
        max_permissable_mass=rec.maximum_permissable_mass_kg,
        power_weight_ratio=rec.power_weight_ratio_kw_kg,
        min_kerb_weight=rec.min_kerbweight_kg,
        gross_vehicle_weight=rec.gross_vehicleweight_kg,
        max_net_power=rec.max_netpower_kw,
        max_braked_towing_weight=rec.max_braked_towing_weight_kg,
        max_unbraked_towing_weight=rec.max_unbraked_towing_weight_kg,
        stationary_sound_level=rec.stationary_soundlevel_db,
        stationary_sound_rpm=rec.stationary_soundlevel_rpm,
        drive_by_sound_level=rec.driveby_soundlevel_db,
    )


def _document_history(rec: UpstreamHpiRecord) -> DocumentHistory:
    return DocumentHistory(
        v5c_issued=tuple(V5cIssue(date_issued=item.date_v5c_issued) for item in rec.v5c_data_items),
        identity_checks=tuple(
            IdentityCheck(
                date=item.date_of_vehicle_identity_check,
                result=item.result_of_vehicle_identity_check,
            )
            for item in rec.vehicle_identity_check_items
        ),
    )


def _updated_on(item: KeeperItem | ColourItem) -> date | None:
    try:
        return datetime.fromisoformat(item.date_last_updated).date()
    except ValueError:
        return None


def _latest(items: Sequence[KeeperItem] | Sequence[ColourItem], name: str) -> Any:
    """Return the first entry, which OneAuto sends as the most recent one.

    The ordering is not documented upstream, so a list whose first entry is
    not the newest by ``date_last_updated`` is logged. Only ISO dates take
    part in the check; entries with other formats are skipped.
    """
    if not items:
        return None
    first = items[0]
    first_date = _updated_on(first)
    if first_date is None:
        return first
    newer = [d for d in map(_updated_on, items[1:]) if d is not None and d > first_date]
    if newer:
        logger.warning(
            "%s: first entry dated %s is older than later entry dated %s",
            name, first_date.isoformat(), max(newer).isoformat(),
        )
    return first


def _ownership_history(rec: UpstreamHpiRecord) -> OwnershipHistory:
    keeper = _latest(rec.keeper_data_items, "keeper_data_items")
    if keeper is None:
        keeper = KeeperItem()
    colour = _latest(rec.colour_data_items, "colour_data_items")
    if colour is None:
        colour = ColourItem()
    return OwnershipHistory(
        number_of_previous_keepers=keeper.number_previous_keepers,
        last_keeper_change_date=keeper.date_of_last_keeper_change,
        colour_changes=ColourChanges(
            number_of_previous_colours=colour.number_previous_colours,
            last_colour_change_date=colour.date_of_last_colour_change,
            last_colour=colour.last_colour,
        ),
    )


def _finance_history(rec: UpstreamHpiRecord) -> FinanceHistory:
    return FinanceHistory(
        finance_agreements=tuple(
            FinanceAgreement(
                start_date=item.finance_start_date,
                term_months=item.finance_term_months,
                type=item.finance_type,
                company=item.finance_company,
                contact_number=item.finance_company_contact_number,
                agreement_number=item.finance_agreement_number,
                vehicle_description=item.financed_vehicle_desc,
            )
            for item in rec.finance_data_items
        )
    )


def _cherished_transfers(rec: UpstreamHpiRecord) -> tuple[CherishedTransfer, ...]:
    return tuple(
        CherishedTransfer(
            transfer_date=item.cherished_plate_transfer_date,
            previous_vrm=item.previous_vehicle_registration_mark,
            receipt_date=item.date_of_receipt,
            transfer_type=item.transfer_type,
            current_vrm=item.current_vehicle_registration_mark,
        )
        for item in rec.cherished_data_items
    )


def _condition_data(rec: UpstreamHpiRecord) -> ConditionData:
    return ConditionData(
        claims=tuple(
            InsuranceClaim(
                date_of_loss=item.date_of_loss,
                status=item.vehicle_status,
                theft_indicator=item.theft_indictor_literal,
                insurer_name=item.insurer_name,
                insurer_contact=item.insurer_contact_number,
                claim_number=item.insurer_claim_number,
                loss_type=item.loss_type,
                date_removed=item.date_removed,
            )
            for item in rec.condition_data_items
        ),
        stolen_vehicle_reports=tuple(
            StolenVehicleReport(
                date_reported=item.date_reported,
                police_force=item.police_force,
                police_contact=item.police_force_contact_number,
            )
            for item in rec.stolen_vehicle_data_items
        ),
    )


def _risk_data(rec: UpstreamHpiRecord) -> RiskData:
    return RiskData(
        high_risk_items=tuple(
            HighRiskMarker(
                date_of_interest=item.date_of_interest,
                registration_period=item.registration_period,
                risk_type=item.high_risk_type,
                extra_info=item.extra_information,
                company_name=item.company_name,
                company_contact=item.company_contact_number,
                reference=item.company_contact_reference,
            )
            for item in rec.high_risk_data_items
        )
    )


def _search_history(rec: UpstreamHpiRecord) -> tuple[PreviousSearch, ...]:
    return tuple(
        PreviousSearch(
            search_date=item.date_of_search,
            search_time=item.time_of_search,
            business_type=item.business_type_searching,
        )
        for item in rec.previous_search_items
    )
