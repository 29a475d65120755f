import json

from property_onboarding import FormModel, normalize
from property_onboarding.inbound import as_list, is_canonical


def test_legacy_record_basics(legacy_record, today):
    form = normalize(legacy_record, today=today)
    basics = form.basics
    assert basics.project_name == "Skyline Residences"
    assert basics.builder_name == "Acme Builders"
    assert basics.rera_number == "P02400001234"
    assert basics.area_name == "Kokapet"
    assert basics.number_of_towers == "4"
    assert basics.number_of_floors == "32"
    assert basics.total_units == "768"
    assert basics.project_type == "Apartment"
    assert basics.community_type == "Gated"
    assert basics.launch_date == "01/03/2024"
    assert basics.possession_date == "31/12/2027"
    assert basics.construction_status == "Under Construction"


def test_legacy_record_areas_are_cleaned(legacy_record, today):
    form = normalize(legacy_record, today=today)
    assert form.basics.land_unit_system == "acres"
    assert form.basics.total_land_area == "7.5"
    assert form.basics.open_space == "75"
    assert form.basics.total_land_area_sqmt == ""
    assert form.construction.total_buildup_area == "1250000"


def test_legacy_record_construction(legacy_record, today):
    construction = normalize(legacy_record, today=today).construction
    assert construction.price_sheet_link == "https://example.com/prices.pdf"
    assert construction.brochure_link == "https://example.com/brochure.pdf"
    assert construction.carpet_area_percentage == "72"
    assert construction.ceiling_height == "10"
    assert construction.price_per_sft == "8500"
    assert construction.uds == "42.5"
    assert construction.power_backup == "Full"
    assert construction.construction_material == "Concrete"
    assert construction.amenities == ["Gymnasium", "Swimming Pool"]
    assert construction.external_amenities == "Clubhouse, Swimming Pool"
    assert construction.visitor_parking == "yes"
    assert construction.ground_vehicle_movement == "no"
    assert construction.floor_rise_charges is True
    assert construction.floor_rise_amount_per_floor == "50"
    assert construction.floor_rise_applicable_above_floor_no == "5"
    assert construction.facing_charges is False
    assert construction.preferential_location_charges is True
    assert construction.preferential_location_charges_conditions == "Corner units"


def test_legacy_record_units_and_financials(legacy_record, today):
    form = normalize(legacy_record, today=today)
    assert list(form.units.unit_types) == ["2 BHK", "3 BHK"]
    two = form.units.unit_types["2 BHK"].variants[0]
    assert (two.size, two.parking_slots, two.facing, two.uds) == ("1200", "1", "East", "30")
    assert form.units.unit_types["3 BHK"].variants[0].is_sold_out

    assert form.financial.base_project_price == "9500000"
    assert form.financial.extra_car_parking_amount == "0"
    assert form.financial.home_loan == "yes"
    assert form.financial.home_loan_banks == ["SBI", "HDFC"]
    assert form.builder.builder_operating_locations == ["Hyderabad", "Bengaluru"]
    assert form.builder.builder_age == "15"


def test_legacy_record_secondary(legacy_record, today):
    secondary = normalize(legacy_record, today=today).secondary
    assert secondary.commission_percentage == "2"
    assert secondary.validity_period_value == "90"
    assert secondary.whatsapp_registration.enabled is True
    assert secondary.whatsapp_registration.details == "+91 90000 00000"
    assert secondary.email_registration.enabled is False
    assert secondary.crm_app_registration.details == "Portal"
    assert secondary.during_site_visit_registration is True
    assert secondary.project_brochure == "https://example.com/brochure.pdf"
    assert secondary.contact == "040-1234567"
    assert [p.model_dump() for p in secondary.poc_details] == [
        {"name": "Ravi", "contact": "9000000001", "role": "Sales Head", "cp_status": "Accepting"},
        {"name": "Anita", "contact": "9000000002", "role": "Manager", "cp_status": "On-boarded"},
    ]


def test_current_record(current_record, today):
    form = normalize(current_record, today=today)
    assert form.basics.project_name == "Lakeview Villas"
    assert form.basics.project_type == "Villa"
    assert form.basics.community_type == "Semi-Gated"
    assert form.basics.number_of_towers == ""
    assert form.basics.total_land_area == "12"
    assert form.basics.open_space == "40"
    # stored status RTM without a date keeps the RTM sentinel
    assert form.basics.possession_date == "RTM"
    assert form.basics.construction_status == "RTM"
    assert form.construction.construction_material == "Cement Bricks"
    assert form.construction.power_backup == "Partial"
    assert form.financial.base_project_price == "3.5"
    assert form.financial.home_loan_banks == ["SBI", "ICICI"]

    villa = form.units.unit_types["4 BHK"].variants[0]
    assert villa.is_villa
    assert (villa.size_sq_ft, villa.size_sq_yd, villa.parking_slots) == ("2400", "267", "2")

    secondary = form.secondary
    assert secondary.whatsapp_registration.details == "group"
    assert secondary.during_site_visit_registration is False
    assert [p.model_dump() for p in secondary.poc_details] == [
        {"name": "Kiran", "contact": "9111111111", "role": "Site Manager", "cp_status": "Accepting"}
    ]


def test_metric_record(metric_record, today):
    form = normalize(metric_record, today=today)
    assert form.basics.land_unit_system == "sqmt"
    assert form.basics.total_land_area == "2.5"
    assert form.basics.total_land_area_sqmt == "10117.15"
    assert form.basics.open_space_sqmt == "2023.43"
    assert form.basics.possession_date == "30/06/2028"
    assert form.basics.construction_status == "Under Construction"


def test_possession_date_overrides_stored_status(today):
    record = {"ProjectName": "P", "Possession_Date": "2025-06-30", "Construction_Status": "Under Construction"}
    assert normalize(record, today=today).basics.construction_status == "RTM"
    record = {"ProjectName": "P", "Possession_Date": "2027-12-31", "Construction_Status": "Ready to Move"}
    assert normalize(record, today=today).basics.construction_status == "Under Construction"


def test_stored_status_used_when_possession_unparseable(today):
    record = {"ProjectName": "P", "Possession_Date": "someday", "Construction_Status": "about to rtm"}
    form = normalize(record, today=today)
    assert form.basics.possession_date == ""
    assert form.basics.construction_status == "About to RTM"


def test_status_derived_from_possession_when_missing(today):
    record = {"ProjectName": "Soon", "Possession_Date": "2026-02-20"}
    assert normalize(record, today=today).basics.construction_status == "About to RTM"


def test_status_defaults_when_nothing_known(today):
    assert normalize({"ProjectName": "Unknown"}, today=today).basics.construction_status == "Under Construction"


def test_missing_fields_become_empty(today):
    form = normalize({}, today=today)
    assert form.basics.project_name == ""
    assert form.construction.amenities == []
    assert form.units.unit_types == {}
    assert form.secondary.poc_details == []


def test_non_mapping_input_yields_empty_form():
    assert normalize(None) == FormModel()
    assert normalize(["not", "a", "record"]) == FormModel()


def test_json_configurations_string(today):
    record = {"configurations": json.dumps([{"type": "1BHK", "sizeRange": "600"}])}
    form = normalize(record, today=today)
    assert form.units.unit_types["1 BHK"].variants[0].size == "600"


def test_canonical_input_passes_through(legacy_record, today):
    form = normalize(legacy_record, today=today)
    copied = normalize(form)
    assert copied == form
    assert copied is not form
    copied.basics.project_name = "Edited"
    copied.units.unit_types["2 BHK"].variants[0].size = "999"
    assert form.basics.project_name == "Skyline Residences"
    assert form.units.unit_types["2 BHK"].variants[0].size == "1200"
    again = normalize(form.model_dump(by_alias=True), today=today)
    assert again == form


def test_is_canonical():
    assert is_canonical({"basics": {"projectName": "X"}})
    assert not is_canonical({"ProjectName": "X"})
    assert not is_canonical("basics")


def test_as_list():
    assert as_list('["a", "b"]') == ["a", "b"]
    assert as_list("a, b ,") == ["a", "b"]
    assert as_list(["x", None, ""]) == ["x"]
    assert as_list(None) == []
    assert as_list("solo") == ["solo"]
