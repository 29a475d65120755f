from property_onboarding import FormModel, merge_preserving_existing
from property_onboarding.merge import is_empty
from property_onboarding.schema.form import PocEntry, RegistrationChannel, UnitTypeEntry, UnitVariant

METRIC = "PRM/KA/RERA/1251/446/PR/010124/006543"


def test_is_empty():
    assert is_empty(None)
    assert is_empty("")
    assert is_empty(False)
    assert is_empty([])
    assert is_empty({})
    assert is_empty(RegistrationChannel())
    assert not is_empty("0")
    assert not is_empty(True)
    assert not is_empty(RegistrationChannel(details="group"))


def test_existing_values_win():
    existing = FormModel.model_validate({"basics": {"projectName": "Draft Name", "city": ""}})
    incoming = FormModel.model_validate(
        {"basics": {"projectName": "Fetched Name", "city": "Pune", "builderName": "Fetched Builder"}}
    )
    merged = merge_preserving_existing(existing, incoming)
    assert merged.basics.project_name == "Draft Name"
    assert merged.basics.city == "Pune"
    assert merged.basics.builder_name == "Fetched Builder"


def test_lists_and_nested_sections_fill_only_when_empty():
    existing = FormModel()
    existing.secondary.poc_details = [PocEntry(name="Mine")]
    incoming = FormModel()
    incoming.secondary.poc_details = [PocEntry(name="Theirs")]
    incoming.secondary.whatsapp_registration = RegistrationChannel(enabled=True, details="group")
    incoming.construction.amenities = ["Gymnasium"]

    merged = merge_preserving_existing(existing, incoming)
    assert [p.name for p in merged.secondary.poc_details] == ["Mine"]
    assert merged.secondary.whatsapp_registration.enabled is True
    assert merged.construction.amenities == ["Gymnasium"]


def test_units_replaced_by_incoming():
    existing = FormModel()
    existing.units.unit_types = {"2 BHK": UnitTypeEntry(enabled=True, variants=[UnitVariant.apartment(size="900")])}
    incoming = FormModel()
    incoming.units.unit_types = {"3 BHK": UnitTypeEntry(enabled=True, variants=[UnitVariant.apartment(size="1500")])}
    merged = merge_preserving_existing(existing, incoming)
    assert list(merged.units.unit_types) == ["3 BHK"]
    assert merged.units.configurations[0]["sizeRange"] == "1500"


def test_land_unit_system_follows_merged_rera():
    existing = FormModel.model_validate({"basics": {"landUnitSystem": "acres"}})
    incoming = FormModel.model_validate({"basics": {"reraNumber": METRIC}})
    merged = merge_preserving_existing(existing, incoming)
    assert merged.basics.rera_number == METRIC
    assert merged.basics.land_unit_system == "sqmt"


def test_merge_does_not_mutate_inputs():
    existing = FormModel()
    incoming = FormModel.model_validate({"basics": {"projectName": "Fetched"}})
    merged = merge_preserving_existing(existing, incoming)
    merged.basics.city = "Changed"
    assert existing.basics.project_name == ""
    assert incoming.basics.city == ""


def test_missing_sides():
    form = FormModel.model_validate({"basics": {"projectName": "Only"}})
    assert merge_preserving_existing(None, form) is form
    assert merge_preserving_existing(form, None) is form
    assert merge_preserving_existing(None, None) == FormModel()
