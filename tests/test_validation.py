from conftest import couple, exclusion, make_config, make_guest

from wedding_seating_plan.solver import generate
from wedding_seating_plan.validation import validate


def test_empty_guest_list_is_invalid():
    result = validate([], [], [], make_config(2, 4, 4))
    assert not result.valid
    assert result.errors == ("No guests have been added.",)


def test_honor_table_too_small_for_honorees_and_partners():
    guests = [
        make_guest("w1", role="witness"),
        make_guest("p1"),
        make_guest("w2", role="witness"),
        make_guest("p2"),
    ]
    couples = [couple("w1", "p1"), couple("w2", "p2")]
    result = validate(guests, couples, [], make_config(2, 4, 3))
    assert not result.valid
    assert any("honor table can only accommodate 3" in e for e in result.errors)


def test_couple_that_is_also_an_exclusion():
    guests = [make_guest("a", "Anna"), make_guest("b", "Ben"), make_guest("c")]
    result = validate(guests, [couple("a", "b")], [exclusion("b", "a")], make_config(2, 4, 2))
    assert not result.valid
    assert any("Anna" in e and "Ben" in e and "couple" in e for e in result.errors)

    generated = generate(guests, [couple("a", "b")], [exclusion("b", "a")], make_config(2, 4, 2))
    assert not generated.success
    assert generated.tables == ()
    assert generated.warnings == ()
    assert generated.errors == result.errors


def test_oversized_couple_group():
    guests = [make_guest(g) for g in "abcd"]
    couples = [couple("a", "b"), couple("b", "c")]
    result = validate(guests, couples, [], make_config(3, 2, 2))
    assert not result.valid
    assert any("contains 3 people" in e and "capacity is 2" in e for e in result.errors)


def test_group_touching_honor_table_uses_honor_capacity():
    guests = [make_guest("w", role="witness"), make_guest("p")]
    result = validate(guests, [couple("w", "p")], [], make_config(0, 1, 2))
    assert result.valid


def test_more_guests_than_seats():
    guests = [make_guest(g) for g in "abcde"]
    config = make_config(1, 2, 2)
    result = validate(guests, [], [], config)
    assert not result.valid
    assert any("cannot be seated" in e for e in result.errors)
    assert not generate(guests, [], [], config).success


def test_all_errors_are_collected():
    guests = [make_guest("w", role="witness"), make_guest("p"), make_guest("x"), make_guest("y")]
    couples = [couple("w", "p"), couple("x", "y")]
    result = validate(guests, couples, [exclusion("x", "y")], make_config(2, 4, 1))
    assert len(result.errors) == 3


def test_validation_is_idempotent():
    guests = [make_guest(g) for g in "abc"]
    args = (guests, [couple("a", "b")], [exclusion("a", "b")], make_config(1, 2, 2))
    assert validate(*args) == validate(*args)
