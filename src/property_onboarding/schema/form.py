from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class FormSection(BaseModel):
    """Base for every form section.

    Attributes are snake_case; the UI shape (camelCase) is available through
    `model_dump(by_alias=True)` and accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BasicsSection(FormSection):
    project_name: str = ""
    builder_name: str = ""
    rera_number: str = ""
    area_name: str = ""
    city: str = ""
    state: str = ""
    project_location: str = ""
    building_name: str = ""
    project_type: str = ""
    community_type: str = ""
    number_of_towers: str = ""
    number_of_floors: str = ""
    flats_per_floor: str = ""
    total_units: str = ""
    # acres (or the stored unit) plus the sqmt value entered on metric records
    total_land_area: str = ""
    total_land_area_sqmt: str = ""
    # percentage plus the absolute sqmt value on metric records
    open_space: str = ""
    open_space_sqmt: str = ""
    land_unit_system: str = "acres"
    launch_date: str = ""
    possession_date: str = ""
    construction_status: str = ""


class ConstructionSection(FormSection):
    price_sheet_link: str = ""
    brochure_link: str = ""
    total_buildup_area: str = ""
    total_buildup_area_sqmt: str = ""
    uds: str = ""
    fsi: str = ""
    carpet_area_percentage: str = ""
    ceiling_height: str = ""
    main_door_height: str = ""
    price_per_sft: str = ""
    power_backup: str = ""
    passenger_lifts: str = ""
    service_lifts: str = ""
    visitor_parking: str = ""
    ground_vehicle_movement: str = ""
    construction_material: str = ""
    external_amenities: str = ""
    amenities: List[str] = Field(default_factory=list)
    specifications: str = ""

    floor_rise_charges: bool = False
    floor_rise_amount_per_floor: str = ""
    floor_rise_applicable_above_floor_no: str = ""
    facing_charges: bool = False
    facing_charges_amount: str = ""
    preferential_location_charges: bool = False
    preferential_location_charges_conditions: str = ""


class UnitVariant(FormSection):
    """One size/parking row of a unit type.

    Villa rows carry `size_sq_ft`/`size_sq_yd`, apartment rows carry
    `size`/`size_unit`; the unused pair stays None.
    """

    size: Optional[str] = None
    size_unit: Optional[str] = None
    size_sq_ft: Optional[str] = None
    size_sq_yd: Optional[str] = None
    parking_slots: str = ""
    facing: str = ""
    uds: str = ""
    config_sold_out_status: str = "active"

    @property
    def is_villa(self) -> bool:
        return self.size_sq_ft is not None or self.size_sq_yd is not None

    @property
    def is_sold_out(self) -> bool:
        return self.config_sold_out_status == "soldout"

    @classmethod
    def villa(cls, **kwargs: Any) -> "UnitVariant":
        kwargs.setdefault("size_sq_ft", "")
        kwargs.setdefault("size_sq_yd", "")
        return cls(**kwargs)

    @classmethod
    def apartment(cls, **kwargs: Any) -> "UnitVariant":
        kwargs.setdefault("size", "")
        kwargs.setdefault("size_unit", "Sq ft")
        return cls(**kwargs)


class UnitTypeEntry(FormSection):
    enabled: bool = False
    variants: List[UnitVariant] = Field(default_factory=list)


class UnitsSection(FormSection):
    unit_types: Dict[str, UnitTypeEntry] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def configurations(self) -> List[Dict[str, Any]]:
        from ..configurations import derive_configurations

        return derive_configurations(self.unit_types)


class BuilderSection(FormSection):
    builder_age: str = ""
    builder_total_properties: str = ""
    builder_upcoming_properties: str = ""
    builder_completed_properties: str = ""
    builder_ongoing_projects: str = ""
    builder_origin_city: str = ""
    builder_operating_locations: List[str] = Field(default_factory=list)


class FinancialSection(FormSection):
    base_project_price: str = ""
    extra_car_parking_amount: str = ""
    home_loan: str = ""
    home_loan_banks: List[str] = Field(default_factory=list)
    previous_complaints: str = ""
    complaint_details: str = ""


class RegistrationChannel(FormSection):
    enabled: bool = False
    details: str = ""


class PocEntry(FormSection):
    name: str = ""
    contact: str = ""
    role: str = ""
    cp_status: str = ""


class SecondarySection(FormSection):
    commission_percentage: str = ""
    there_price: str = ""
    relai_price: str = ""
    payout_time_period: str = ""
    lead_registration_required: str = ""
    lead_acknowledgement_time: str = ""
    validity_period: str = ""
    validity_period_value: str = ""
    whatsapp_registration: RegistrationChannel = Field(default_factory=RegistrationChannel)
    email_registration: RegistrationChannel = Field(default_factory=RegistrationChannel)
    web_form_registration: RegistrationChannel = Field(default_factory=RegistrationChannel)
    crm_app_registration: RegistrationChannel = Field(default_factory=RegistrationChannel)
    during_site_visit_registration: bool = False
    lead_registration_notes: str = ""
    poc_details: List[PocEntry] = Field(default_factory=list)
    project_brochure: str = ""
    contact: str = ""


class FormModel(FormSection):
    """Canonical editing-session model of one property submission."""

    basics: BasicsSection = Field(default_factory=BasicsSection)
    construction: ConstructionSection = Field(default_factory=ConstructionSection)
    units: UnitsSection = Field(default_factory=UnitsSection)
    builder: BuilderSection = Field(default_factory=BuilderSection)
    financial: FinancialSection = Field(default_factory=FinancialSection)
    secondary: SecondarySection = Field(default_factory=SecondarySection)


SECTION_NAMES = ("basics", "construction", "units", "builder", "financial", "secondary")
