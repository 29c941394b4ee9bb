import io

import pytest

from wedding_seating_plan.csv_loader import load_all, load_couples, load_guests, pad_guests
from wedding_seating_plan.sequencer import is_auto_generated


def buf(text):
    return io.StringIO(text)


def test_load_sample_data(data_dir):
    guests, couples, exclusions = load_all(
        data_dir / "guests.csv", data_dir / "couples.csv", data_dir / "exclusions.csv"
    )
    assert len(guests) == 12
    assert guests[0].full_name == "Claire Martin"
    assert guests[0].role == "married"
    assert guests[11].age is None
    assert [c.id for c in couples] == ["c1", "c2", "c3", "c4", "c5"]
    assert exclusions[1].members() == ("12", "10")


def test_optional_columns_default():
    guests = load_guests(buf("id,first_name\n1,Ana\n"))
    assert guests[0].last_name is None
    assert guests[0].age is None
    assert guests[0].role == "regular"


def test_role_is_case_insensitive():
    guests = load_guests(buf("id,first_name,role\n1,Ana,Witness\n"))
    assert guests[0].role == "witness"


@pytest.mark.parametrize(
    "text, message",
    [
        ("id,last_name\n1,Martin\n", "missing columns"),
        ("id,first_name\n1,\n", "required"),
        ("id,first_name\n1,Ana\n1,Bob\n", "Duplicate"),
        ("id,first_name,role\n1,Ana,priest\n", "unknown role"),
        ("id,first_name,age\n1,Ana,old\n", "age"),
        ("id,first_name,age\n1,Ana,3.7\n", "age"),
    ],
)
def test_guest_errors(text, message):
    with pytest.raises(ValueError, match=message):
        load_guests(buf(text))


def test_couples_reject_unknown_and_self_pairs():
    ids = {"1", "2", "3"}
    with pytest.raises(ValueError, match="unknown guest"):
        load_couples(buf("guest1_id,guest2_id\n1,9\n"), ids)
    with pytest.raises(ValueError, match="themselves"):
        load_couples(buf("guest1_id,guest2_id\n1,1\n"), ids)


def test_guest_in_two_couples_rejected():
    with pytest.raises(ValueError, match="already belongs"):
        load_couples(buf("guest1_id,guest2_id\n1,2\n2,3\n"))


def test_pair_ids_generated_when_missing():
    couples = load_couples(buf("guest1_id,guest2_id\n1,2\n"))
    assert couples[0].id == "couples-1"


def test_pad_guests():
    guests = load_guests(buf("id,first_name\n1,Ana\n2,Bob\n"))
    padded = pad_guests(guests, 4)
    assert [g.id for g in padded] == ["1", "2", "auto-3", "auto-4"]
    assert padded[3].full_name == "Guest 4"
    assert all(is_auto_generated(g) for g in padded[2:])
    assert pad_guests(guests, 1) == guests
