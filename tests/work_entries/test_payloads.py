import pytest

from src.tobacco_workforce.tobacco_workforce.core.exceptions import ValidationError
from src.tobacco_workforce.tobacco_workforce.work_entries.payloads import (
    GradingPayload,
    MachinePayload,
    OutputEntry,
    ScalePayload,
    ScaleReading,
    TicketPayload,
    derive_totals,
    payload_from_columns,
    payload_from_dict,
    payload_to_columns,
)


def test_no_payload_has_no_totals():
    totals = derive_totals(None)
    assert totals.total_sticks is None
    assert totals.output_mass is None


def test_scales_without_sticks_leave_total_empty():
    totals = derive_totals(ScalePayload(readings=(ScaleReading(1, 10.0),)))
    assert totals.total_sticks is None
    assert totals.output_mass is None


def test_machine_totals_by_category():
    payload = MachinePayload(
        mass_inputs=(100.0, 80.0),
        outputs=(OutputEntry("output", 120.0), OutputEntry("sticks", 30.0), OutputEntry("dust", 5.0), OutputEntry("output", 10.0)),
    )

    totals = derive_totals(payload)

    assert totals.output_mass == pytest.approx(130.0)
    assert totals.total_sticks == pytest.approx(30.0)


def test_machine_rejects_unknown_category():
    with pytest.raises(ValidationError):
        MachinePayload(mass_inputs=(1.0,), outputs=(OutputEntry("smoke", 1.0),))


def test_grading_and_ticket_totals():
    assert derive_totals(GradingPayload((OutputEntry("A", 12.5), OutputEntry("B", 7.5)))).output_mass == 20.0
    assert derive_totals(TicketPayload("Sweeping")).output_mass is None


def test_unhandled_payload_type_raises():
    with pytest.raises(TypeError):
        derive_totals(object())


def test_api_payload_decoding_by_kind():
    payload = payload_from_dict(
        {"kind": "scales", "scale_entries": [{"in_value": 20, "out_value": 18, "sticks": 1.5}, {"in_value": 5}]}
    )

    assert isinstance(payload, ScalePayload)
    assert payload.readings[0] == ScaleReading(1, 20.0, 18.0, 1.5)
    assert payload.readings[1].scale_number == 2
    assert payload_from_dict(None) is None
    with pytest.raises(ValidationError):
        payload_from_dict({"kind": "telepathy"})


def test_columns_fill_only_the_variant_fields():
    payload = MachinePayload(mass_inputs=(50.0,), outputs=(OutputEntry("f8", 2.0),))

    columns = payload_to_columns(payload)

    assert columns["massinputs"] == [50.0]
    assert columns["outputentries"] == [{"category": "f8", "mass": 2.0}]
    assert columns["scaleentries"] is None
    assert columns["dutyname"] is None
    assert payload_from_columns("machine", columns) == payload
    assert payload_from_columns(None, columns) is None


def test_malformed_api_payload_is_a_validation_error():
    with pytest.raises(ValidationError, match="Malformed cartons payload"):
        payload_from_dict({"kind": "cartons", "cartons": [{"mass": "heavy"}]})


def test_non_object_api_payload_is_a_validation_error():
    with pytest.raises(ValidationError, match="Payload must be an object"):
        payload_from_dict(["x"])
