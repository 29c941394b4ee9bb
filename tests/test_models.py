import pytest

from wedding_seating_plan.models import (
    Guest,
    PlanConfiguration,
    SeatingPlanResult,
    Table,
    parse_optional_int,
)


def test_guest_names_and_family_key():
    guest = Guest(id="1", first_name="Alex", last_name="  Martin ", role="witness")
    assert guest.full_name == "Alex   Martin "
    assert guest.family_key == "martin"
    assert guest.is_honor

    single = Guest(id="2", first_name="Sam")
    assert single.full_name == "Sam"
    assert single.family_key == ""
    assert not single.is_honor


def test_configuration_rejects_bad_numbers():
    with pytest.raises(ValueError):
        PlanConfiguration(number_of_tables=-1)
    with pytest.raises(ValueError):
        PlanConfiguration(number_of_tables=2, seats_per_table=0)
    with pytest.raises(ValueError):
        PlanConfiguration(table_shape="hexagon")


def test_total_seats_includes_honor_table():
    config = PlanConfiguration(number_of_tables=3, seats_per_table=4, honor_table_seats=6)
    assert config.total_seats == 18


def test_parse_optional_int_handles_missing_values():
    assert parse_optional_int("") is None
    assert parse_optional_int(float("nan")) is None
    assert parse_optional_int("42") == 42
    assert parse_optional_int("42.0") == 42
    with pytest.raises(ValueError):
        parse_optional_int("3.7")


def test_result_copy_is_independent():
    table = Table(id="t2", number=2, name="Table 2", capacity=2, guests=[Guest(id="a", first_name="A")])
    result = SeatingPlanResult(success=True, tables=(table,))
    copied = result.copy()
    copied.tables[0].guests.clear()
    assert result.tables[0].guest_ids() == ["a"]
    assert result.table_of("a") is table
    assert result.assignments() == {"a": 2}
