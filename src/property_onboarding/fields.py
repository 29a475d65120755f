"""Declared key table for every flat field of a property record.

Each `FieldSpec` names the canonical form attribute, the key it is stored
under in each payload variant, and the ordered candidate keys the inbound
normalizer tries. Candidate order is: camelCase form key, legacy key,
current key, then any spellings seen in older records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from pydantic.alias_generators import to_camel

TEXT = "text"
NUMBER = "number"
LIST = "list"
YESNO = "yesno"
FLAG = "flag"
# Handled by dedicated code in inbound/outbound.
DATE = "date"
ENUM = "enum"
AREA = "area"

PLAIN_KINDS = frozenset({TEXT, NUMBER, LIST, YESNO, FLAG})


@dataclass(frozen=True)
class FieldSpec:
    section: str
    name: str
    legacy_key: str
    current_key: str
    kind: str = TEXT
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def form_key(self) -> str:
        return to_camel(self.name)

    @property
    def path(self) -> str:
        """Dotted UI path, e.g. `basics.projectName`."""
        return f"{self.section}.{self.form_key}"

    @property
    def candidates(self) -> Tuple[str, ...]:
        ordered: List[str] = []
        for key in (self.form_key, self.legacy_key, self.current_key, *self.aliases):
            if key and key not in ordered:
                ordered.append(key)
        return tuple(ordered)

    def key_for(self, variant: str) -> str:
        return self.current_key if variant == "current" else self.legacy_key


def _f(section: str, name: str, legacy: str, current: str, kind: str = TEXT, *aliases: str) -> FieldSpec:
    return FieldSpec(section, name, legacy, current, kind, tuple(aliases))


FIELDS: Tuple[FieldSpec, ...] = (
    # basics
    _f("basics", "project_name", "ProjectName", "projectname", TEXT, "Project_Name"),
    _f("basics", "builder_name", "BuilderName", "buildername", TEXT, "Builder_Name"),
    _f("basics", "rera_number", "RERA_Number", "rera_number", TEXT, "reraNumber", "ReraNumber"),
    _f("basics", "area_name", "areaname", "areaname", TEXT, "AreaName", "Area_Name"),
    _f("basics", "city", "City", "city"),
    _f("basics", "state", "State", "state"),
    _f("basics", "project_location", "ProjectLocation", "projectlocation", TEXT, "Project_Location"),
    _f("basics", "building_name", "BuildingName", "buildingname", TEXT, "Building_Name"),
    _f("basics", "project_type", "Project_Type", "project_type", ENUM, "ProjectType"),
    _f("basics", "community_type", "CommunityType", "communitytype", ENUM, "Community_Type"),
    _f("basics", "number_of_towers", "Number_of_Towers", "number_of_towers", NUMBER),
    _f("basics", "number_of_floors", "Number_of_Floors", "number_of_floors", NUMBER),
    _f("basics", "flats_per_floor", "Number_of_Flats_Per_Floor", "number_of_flats_per_floor", NUMBER),
    _f("basics", "total_units", "Total_Number_of_Units", "total_number_of_units", NUMBER),
    _f("basics", "total_land_area", "Total_land_Area", "total_land_area", AREA, "Total_Land_Area"),
    _f("basics", "open_space", "Open_Space", "open_space", AREA),
    _f("basics", "launch_date", "Project_Launch_Date", "project_launch_date", DATE, "Launch_Date"),
    _f("basics", "possession_date", "Possession_Date", "possession_date", DATE),
    _f("basics", "construction_status", "Construction_Status", "construction_status", ENUM),
    # construction
    _f("construction", "price_sheet_link", "pricesheet_link_1", "pricesheet_link_1", TEXT, "PriceSheetLink", "Pricesheet_Link"),
    _f("construction", "brochure_link", "ProjectBrochure", "projectbrochure", TEXT),
    _f("construction", "total_buildup_area", "total_buildup_area", "total_buildup_area", AREA, "Total_Buildup_Area"),
    _f("construction", "uds", "uds", "uds", NUMBER, "UDS"),
    _f("construction", "fsi", "fsi", "fsi", NUMBER, "FSI"),
    _f("construction", "carpet_area_percentage", "Carpet_area_Percentage", "carpet_area_percentage", NUMBER),
    _f("construction", "ceiling_height", "Floor_to_Ceiling_Height", "floor_to_ceiling_height", NUMBER),
    _f("construction", "main_door_height", "main_door_height", "main_door_height", NUMBER, "Main_Door_Height"),
    _f("construction", "price_per_sft", "Price_per_sft", "price_per_sft", NUMBER),
    _f("construction", "power_backup", "PowerBackup", "powerbackup", ENUM, "Power_Backup"),
    _f("construction", "passenger_lifts", "No_of_Passenger_lift", "no_of_passenger_lift", NUMBER),
    _f("construction", "service_lifts", "No_of_Service_lift", "no_of_service_lift", NUMBER),
    _f("construction", "visitor_parking", "Visitor_Parking", "visitor_parking", YESNO),
    _f("construction", "ground_vehicle_movement", "Ground_vehicle_Movement", "ground_vehicle_movement", YESNO),
    _f("construction", "construction_material", "Construction_Material", "construction_material", ENUM),
    _f("construction", "external_amenities", "External_Amenities", "external_amenities", ENUM),
    _f("construction", "amenities", "amenities", "amenities", ENUM, "Amenities"),
    _f("construction", "specifications", "Specification", "specification", TEXT, "Specifications"),
    _f("construction", "floor_rise_charges", "floor_rise_charges", "floor_rise_charges", FLAG, "Floor_Rise_Charges"),
    _f("construction", "floor_rise_amount_per_floor", "floor_rise_amount_per_floor", "floor_rise_amount_per_floor", NUMBER, "Floor_Rise_Amount_per_Floor"),
    _f("construction", "floor_rise_applicable_above_floor_no", "floor_rise_applicable_above_floor_no", "floor_rise_applicable_above_floor_no", NUMBER, "Floor_Rise_Applicable_Above_Floor_No"),
    _f("construction", "facing_charges", "facing_charges", "facing_charges", FLAG, "Facing_Charges"),
    _f("construction", "facing_charges_amount", "facing_charges_amount", "facing_charges_amount", NUMBER, "Facing_Charges_Amount"),
    _f("construction", "preferential_location_charges", "preferential_location_charges", "preferential_location_charges", FLAG, "Preferential_Location_Charges"),
    _f("construction", "preferential_location_charges_conditions", "preferential_location_charges_conditions", "preferential_location_charges_conditions", TEXT, "Preferential_Location_Charges_Conditions"),
    # builder
    _f("builder", "builder_age", "builder_age", "builder_age", NUMBER, "Builder_Age"),
    _f("builder", "builder_total_properties", "builder_total_properties", "builder_total_properties", NUMBER, "Builder_Total_Properties"),
    _f("builder", "builder_upcoming_properties", "builder_upcoming_properties", "builder_upcoming_properties", NUMBER, "Builder_Upcoming_Properties"),
    _f("builder", "builder_completed_properties", "builder_completed_properties", "builder_completed_properties", NUMBER, "Builder_Completed_Properties"),
    _f("builder", "builder_ongoing_projects", "builder_ongoing_projects", "builder_ongoing_projects", NUMBER, "Builder_Ongoing_Projects"),
    _f("builder", "builder_origin_city", "builder_origin_city", "builder_origin_city", TEXT, "Builder_Origin_City"),
    _f("builder", "builder_operating_locations", "builder_operating_locations", "builder_operating_locations", LIST, "Builder_Operating_Locations"),
    # financial
    _f("financial", "base_project_price", "BaseProjectPrice", "baseprojectprice", NUMBER, "Base Project Price", "Base_Project_Price"),
    _f("financial", "extra_car_parking_amount", "Amount_For_Extra_Car_Parking", "amount_for_extra_car_parking", NUMBER),
    _f("financial", "home_loan", "Home_loan", "home_loan", YESNO, "Home_Loan"),
    _f("financial", "home_loan_banks", "available_banks_for_loan", "available_banks_for_loan", LIST, "Available_Banks_for_Loan"),
    _f("financial", "previous_complaints", "previous_complaints_on_builder", "previous_complaints_on_builder", YESNO, "Previous_Complaints_on_Builder"),
    _f("financial", "complaint_details", "complaint_details", "complaint_details", TEXT, "Complaint_Details"),
    # secondary
    _f("secondary", "commission_percentage", "Commission_percentage", "commission_percentage", NUMBER, "Commission_Percentage"),
    _f("secondary", "there_price", "What_is_there_Price", "what_is_there_price", NUMBER),
    _f("secondary", "relai_price", "What_is_relai_price", "what_is_relai_price", NUMBER, "What_is_Relai_Price", "What_is_relai_Price"),
    _f("secondary", "payout_time_period", "After_agreement_of_sale_what_is_payout_time_period", "after_agreement_of_sale_what_is_payout_time_period"),
    _f("secondary", "lead_registration_required", "Is_lead_Registration_required_before_Site_visit", "is_lead_registration_required_before_site_visit", YESNO, "Is_Lead_Registration_Required_Before_Site_Visit"),
    _f("secondary", "lead_acknowledgement_time", "Turnaround_Time_for_Lead_Acknowledgement", "turnaround_time_for_lead_acknowledgement"),
    _f("secondary", "validity_period", "Is_there_validity_period_for_registered_lead", "is_there_validity_period_for_registered_lead", YESNO, "Is_There_Validity_Period_for_Registered_Lead"),
    _f("secondary", "validity_period_value", "validity_period_value", "validity_period_value", NUMBER, "Validity_Period_Value"),
    _f("secondary", "lead_registration_notes", "Notes_Comments_on_lead_registration_workflow", "notes_comments_on_lead_registration_workflow", TEXT, "Notes_Comments_on_Lead_Registration_Workflow"),
    _f("secondary", "project_brochure", "ProjectBrochure", "projectbrochure", TEXT),
    _f("secondary", "contact", "Contact", "contact"),
)

FIELDS_BY_NAME: Dict[str, FieldSpec] = {spec.name: spec for spec in FIELDS}

# Required before a payload is submit-ready.
REQUIRED_FIELDS: Tuple[str, ...] = ("project_name", "builder_name", "rera_number")


def field_for(name: str) -> FieldSpec:
    return FIELDS_BY_NAME[name]


def plain_fields(section: str = "") -> Iterable[FieldSpec]:
    for spec in FIELDS:
        if spec.kind in PLAIN_KINDS and (not section or spec.section == section):
            yield spec
