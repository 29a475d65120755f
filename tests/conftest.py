import copy
import json
import sys
from datetime import date
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC = REPO_ROOT / "src"

# Prefer repo sources over any installed package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


TODAY = date(2026, 1, 15)
METRIC_RERA = "PRM/KA/RERA/1251/446/PR/010124/006543"

LEGACY_RECORD = {
    "ProjectName": "Skyline Residences",
    "BuilderName": "Acme Builders",
    "RERA_Number": "P02400001234",
    "areaname": "Kokapet",
    "City": "Hyderabad",
    "State": "Telangana",
    "ProjectLocation": "Kokapet, Hyderabad",
    "BuildingName": "Tower A",
    "Project_Type": "Apartment",
    "CommunityType": "Gated Community",
    "Number_of_Towers": 4,
    "Number_of_Floors": "32 floors",
    "Number_of_Flats_Per_Floor": 6,
    "Total_Number_of_Units": "768",
    "Total_land_Area": "7.5 acres",
    "Open_Space": "75%",
    "Project_Launch_Date": "2024-03-01",
    "Possession_Date": "2027-12-31T00:00:00Z",
    "Construction_Status": "Under Construction",
    "pricesheet_link_1": "https://example.com/prices.pdf",
    "ProjectBrochure": "https://example.com/brochure.pdf",
    "total_buildup_area": "1,250,000 sqft",
    "uds": 42.5,
    "fsi": "3.2",
    "Carpet_area_Percentage": "72%",
    "Floor_to_Ceiling_Height": "10 ft",
    "main_door_height": 8,
    "Price_per_sft": "8,500",
    "PowerBackup": "Full Backup",
    "No_of_Passenger_lift": 4,
    "No_of_Service_lift": 2,
    "Visitor_Parking": "Yes",
    "Ground_vehicle_Movement": "No",
    "Construction_Material": "RCC",
    "External_Amenities": "Clubhouse, Swimming Pool",
    "amenities": ["Gymnasium", "swimming pool", "Helipad"],
    "Specification": "Vitrified tiles",
    "floor_rise_charges": "yes",
    "floor_rise_amount_per_floor": 50,
    "floor_rise_applicable_above_floor_no": 5,
    "facing_charges": "no",
    "preferential_location_charges": "yes",
    "preferential_location_charges_conditions": "Corner units",
    "configurations": [
        {
            "type": "2BHK",
            "sizeRange": 1200,
            "sizeUnit": "Sq ft",
            "No_of_car_Parking": 1,
            "facing": "East",
            "uds": 30,
        },
        {
            "type": "3 BHK",
            "sizeRange": "1650",
            "sizeUnit": "Sq ft",
            "No_of_car_Parking": 2,
            "facing": "North",
            "configSoldOutStatus": "soldout",
        },
    ],
    "builder_age": 15,
    "builder_total_properties": 40,
    "builder_upcoming_properties": 3,
    "builder_completed_properties": 30,
    "builder_ongoing_projects": 7,
    "builder_origin_city": "Hyderabad",
    "builder_operating_locations": ["Hyderabad", "Bengaluru"],
    "BaseProjectPrice": 9500000,
    "Amount_For_Extra_Car_Parking": 0,
    "Home_loan": "Yes",
    "available_banks_for_loan": ["SBI", "HDFC"],
    "previous_complaints_on_builder": "no",
    "complaint_details": "",
    "Commission_percentage": "2%",
    "What_is_there_Price": 9000,
    "What_is_relai_price": 8800,
    "After_agreement_of_sale_what_is_payout_time_period": "30 days",
    "Is_lead_Registration_required_before_Site_visit": "yes",
    "Turnaround_Time_for_Lead_Acknowledgement": "24 hours",
    "Is_there_validity_period_for_registered_lead": "yes",
    "validity_period_value": 90,
    "Accepted_Modes_of_Lead_Registration": {
        "WhatsApp": {"enabled": "yes", "details": "+91 90000 00000"},
        "Email": {"enabled": "no", "details": ""},
        "Web_Form": {"enabled": "no", "details": ""},
        "CRM_App_Access": {"enabled": "yes", "details": "Portal"},
        "During_Site_Visit": "yes",
    },
    "Notes_Comments_on_lead_registration_workflow": "Register before visit",
    "pocDetails": [
        {"pocName": "Ravi", "pocContact": "9000000001", "pocRole": "Sales Head", "pocCP": True},
        {"pocName": "Anita", "pocContact": 9000000002, "pocRole": "Manager", "pocCP": "On-boarded"},
    ],
    "Contact": "040-1234567",
}

CURRENT_RECORD = {
    "projectname": "Lakeview Villas",
    "buildername": "Blue Homes",
    "rera_number": "P02400009999",
    "areaname": "Gachibowli",
    "city": "Hyderabad",
    "state": "Telangana",
    "project_type": "Villa",
    "communitytype": "Semi-Gated Community",
    "number_of_towers": None,
    "total_land_area": 12,
    "open_space": "40",
    "possession_date": None,
    "construction_status": "Ready to Move",
    "construction_material": "cement brick",
    "powerbackup": "Partial",
    "configurations": json.dumps(
        [
            {
                "type": "4BHK",
                "sizeSqFt": 2400,
                "sizeSqYd": 267,
                "No_of_car_Parking": 2,
                "facing": "East",
                "configsoldoutstatus": "active",
            }
        ]
    ),
    "person_to_confirm_registration": [{"name": "Kiran", "contact": "9111111111"}],
    "poc_role": "Site Manager",
    "cp": True,
    "accepted_modes_of_lead_registration": [
        {"WhatsApp": {"enabled": "yes", "details": "group"}, "During_Site_Visit": "no"}
    ],
    "available_banks_for_loan": "SBI, ICICI",
    "baseprojectprice": "3.5 Cr",
}


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def legacy_record():
    return copy.deepcopy(LEGACY_RECORD)


@pytest.fixture
def current_record():
    return copy.deepcopy(CURRENT_RECORD)


@pytest.fixture
def metric_record():
    return {
        "ProjectName": "Metro Heights",
        "BuilderName": "Southern Estates",
        "RERA_Number": METRIC_RERA,
        "Project_Type": "Apartment",
        "CommunityType": "Gated Community",
        "Construction_Material": "Concrete",
        "Total_land_Area": 2.5,
        "Open_Space": 20,
        "total_buildup_area": 50000,
        "Possession_Date": "2028-06-30",
    }


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    from property_onboarding.settings import reset_settings_cache

    for name in (
        "POB_METRIC_RERA_PREFIX",
        "POB_RTM_WINDOW_DAYS",
        "POB_ABOUT_TO_RTM_WINDOW_DAYS",
        "POB_STRICT_PAYLOAD_VALIDATION",
        "POB_DEFAULT_PAYLOAD_VARIANT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
