from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

RiskTier = Literal["LOW", "MEDIUM", "HIGH"]


@dataclass(frozen=True)
class VehicleInfo:
    registration: str
    vin: str
    vin_match: bool
    make: str
    model: str
    colour: str
    fuel_type: str
    body_type: str
    transmission: str
    gears: int
    seats: int
    engine_capacity: int
    engine_number: str
    co2_emissions: int
    manufactured_year: int
    registration_date: str
    first_registration_date: str
    used_before_first_reg: bool


@dataclass(frozen=True)
class LegalStatus:
    is_scrapped: bool
    scrapped_date: str | None
    is_exported: bool
    exported_date: str | None
    is_imported: bool
    is_non_eu_import: bool
    prior_gb_vrm: str | None
    prior_ni_vrm: str | None


@dataclass(frozen=True)
class TechnicalSpecs:
    wheelplan: str
    max_permissable_mass: int
    power_weight_ratio: float
    min_kerb_weight: int
    gross_vehicle_weight: int
    max_net_power: float
    max_braked_towing_weight: int
    max_unbraked_towing_weight: int
    stationary_sound_level: float
    stationary_sound_rpm: int
    drive_by_sound_level: float


@dataclass(frozen=True)
class V5cIssue:
    date_issued: str


@dataclass(frozen=True)
class IdentityCheck:
    date: str
    result: str


@dataclass(frozen=True)
class DocumentHistory:
    v5c_issued: tuple[V5cIssue, ...] = ()
    identity_checks: tuple[IdentityCheck, ...] = ()


@dataclass(frozen=True)
class ColourChanges:
    number_of_previous_colours: int = 0
    last_colour_change_date: str = ""
    last_colour: str = ""


@dataclass(frozen=True)
class OwnershipHistory:
    number_of_previous_keepers: int = 0
    last_keeper_change_date: str = ""
    colour_changes: ColourChanges = field(default_factory=ColourChanges)


@dataclass(frozen=True)
class FinanceAgreement:
    start_date: str
    term_months: int
    type: str
    company: str
    contact_number: str
    agreement_number: int
    vehicle_description: str


@dataclass(frozen=True)
class FinanceHistory:
    finance_agreements: tuple[FinanceAgreement, ...] = ()

    @property
    def has_outstanding_finance(self) -> bool:
        return len(self.finance_agreements) > 0


@dataclass(frozen=True)
class CherishedTransfer:
    transfer_date: str
    previous_vrm: str
    receipt_date: str
    transfer_type: str
    current_vrm: str


@dataclass(frozen=True)
class InsuranceClaim:
    date_of_loss: str
    status: str
    theft_indicator: str
    insurer_name: str
    insurer_contact: str
    claim_number: str
    loss_type: str
    date_removed: str | None


@dataclass(frozen=True)
class StolenVehicleReport:
    date_reported: str
    police_force: str
    police_contact: str


@dataclass(frozen=True)
class ConditionData:
    claims: tuple[InsuranceClaim, ...] = ()
    stolen_vehicle_reports: tuple[StolenVehicleReport, ...] = ()

    @property
    def has_insurance_claims(self) -> bool:
        return len(self.claims) > 0

    @property
    def is_stolen(self) -> bool:
        return len(self.stolen_vehicle_reports) > 0


@dataclass(frozen=True)
class HighRiskMarker:
    date_of_interest: str
    registration_period: int
    risk_type: str
    extra_info: str
    company_name: str
    company_contact: str
    reference: str


@dataclass(frozen=True)
class RiskData:
    high_risk_items: tuple[HighRiskMarker, ...] = ()

    @property
    def has_high_risk_markers(self) -> bool:
        return len(self.high_risk_items) > 0


@dataclass(frozen=True)
class PreviousSearch:
    search_date: str
    search_time: str
    business_type: str


@dataclass(frozen=True)
class Insurance:
    indemnity_months: int = 0
    indemnity_value_gbp: float = 0.0


@dataclass(frozen=True)
class NormalizedHpiReport:
    vehicle_info: VehicleInfo
    legal_status: LegalStatus
    technical_specs: TechnicalSpecs
    document_history: DocumentHistory
    ownership_history: OwnershipHistory
    finance_history: FinanceHistory
    cherished_transfers: tuple[CherishedTransfer, ...]
    condition_data: ConditionData
    risk_data: RiskData
    search_history: tuple[PreviousSearch, ...]
    insurance: Insurance


@dataclass(frozen=True)
class RiskSummary:
    overall_risk: RiskTier
    score: int
    is_stolen: bool
    has_outstanding_finance: bool
    is_write_off: bool
    is_exported: bool
    is_scrapped: bool
    has_insurance_claims: bool
    has_high_risk_markers: bool
    recommended_action: str
    warning_flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class HpiCheck:
    report: NormalizedHpiReport
    risk_summary: RiskSummary
