import pytest
from conftest import couple, exclusion, make_config, make_guest

from wedding_seating_plan.relationships import RelationshipResolver
from wedding_seating_plan.sequencer import group_by_family, is_auto_generated_name, sequence_guests


def order(guests, config, couples=(), exclusions=()):
    resolver = RelationshipResolver(guests, list(couples), list(exclusions))
    return [g.id for g in sequence_guests(guests, config, resolver)]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Guest 12", True),
        ("Invité 3", True),
        ("  Guest 4 ", True),
        ("Guest", False),
        ("Guesty 3", False),
        ("Guest 3a", False),
        ("Alice", False),
    ],
)
def test_auto_generated_names(name, expected):
    assert is_auto_generated_name(name) is expected


def test_exclusions_first_and_fillers_last():
    guests = [
        make_guest("f1", "Guest 1"),
        make_guest("alice"),
        make_guest("bob"),
        make_guest("carol"),
    ]
    result = order(guests, make_config(2, 4, 2), exclusions=[exclusion("carol", "bob")])
    assert result == ["bob", "carol", "alice", "f1"]


def test_role_then_age_when_enabled():
    guests = [
        make_guest("r1", age=30),
        make_guest("g1", role="groomsman", age=50),
        make_guest("b1", role="bridesmaid", age=20),
        make_guest("r2", age=None),
        make_guest("r3", age=18),
    ]
    assert order(guests, make_config(2, 4, 2, by_role=True, by_age=True)) == ["b1", "g1", "r3", "r1", "r2"]
    # Criteria off: input order survives
    assert order(guests, make_config(2, 4, 2)) == ["r1", "g1", "b1", "r2", "r3"]


def test_family_clusters_largest_first_with_partners():
    guests = [
        make_guest("ann", last="Smith"),
        make_guest("bob", last="Jones"),
        make_guest("cid", last="smith "),
        make_guest("dan", last="Smith"),
        make_guest("eve", last="Jones"),
        make_guest("fay", last="Brown"),
        make_guest("f1", "Guest 7"),
    ]
    result = order(guests, make_config(3, 4, 2, by_family=True), couples=[couple("fay", "bob")])
    assert result == ["ann", "cid", "dan", "bob", "fay", "eve", "f1"]


def test_large_family_keeps_members_when_partner_is_outside():
    guests = [
        make_guest("bob", last="Jones"),
        make_guest("ann", last="Smith"),
        make_guest("cid", last="Smith"),
        make_guest("dan", last="Smith"),
    ]
    result = order(guests, make_config(2, 4, 2, by_family=True), couples=[couple("ann", "bob")])
    assert result == ["ann", "bob", "cid", "dan"]


def test_exclusion_member_leads_its_family():
    guests = [
        make_guest("ann", last="Smith"),
        make_guest("cid", last="Smith"),
        make_guest("x", last="Other"),
    ]
    result = order(guests, make_config(2, 4, 2, by_family=True), exclusions=[exclusion("cid", "x")])
    assert result == ["cid", "ann", "x"]


def test_group_by_family_normalizes_names():
    guests = [make_guest("a", last="Smith"), make_guest("b", last=" SMITH"), make_guest("c")]
    assert [[g.id for g in grp] for grp in group_by_family(guests)] == [["a", "b"], ["c"]]
