from conftest import couple, exclusion, make_guest

from wedding_seating_plan.relationships import RelationshipResolver, couple_connected_groups


def build(guest_ids, couples=(), exclusions=()):
    guests = [make_guest(g) for g in guest_ids]
    return guests, RelationshipResolver(guests, list(couples), list(exclusions))


def test_partner_lookup_is_symmetric():
    guests, resolver = build("abc", couples=[couple("a", "b")])
    a, b, c = guests
    assert resolver.partner_of(a) is b
    assert resolver.partner_of(b) is a
    assert resolver.partner_of(c) is None


def test_exclusions_are_symmetric():
    guests, resolver = build("abc", exclusions=[exclusion("a", "c")])
    a, b, c = guests
    assert resolver.excludes(a, c)
    assert resolver.excludes(c, a)
    assert not resolver.excludes(a, b)
    assert resolver.has_exclusion(c)
    assert not resolver.has_exclusion(b)
    assert resolver.exclusion_partners("a") == {"c"}
    assert resolver.exclusion_partners("b") == set()


def test_groups_skip_isolated_guests():
    guests, _ = build("abcde")
    groups = couple_connected_groups(guests, [couple("a", "b"), couple("d", "c")])
    assert groups == [["a", "b"], ["c", "d"]]


def test_chained_couples_form_one_group():
    guests, resolver = build("abcd", couples=[couple("a", "b"), couple("b", "c")])
    assert couple_connected_groups(guests, resolver.couples) == [["a", "b", "c"]]
    assert [g.id for g in resolver.couple_group_of(guests[2])] == ["c", "b", "a"]
    assert [g.id for g in resolver.couple_group_of(guests[3])] == ["d"]
    assert resolver.coupled_with("b") == {"a", "c"}


def test_conflicts_pairs_newcomers_with_seated_guests():
    guests, resolver = build("abcd", exclusions=[exclusion("a", "c"), exclusion("b", "d")])
    a, b, c, d = guests
    pairs = resolver.conflicts([a, b], [c, d])
    assert [(x.id, y.id) for x, y in pairs] == [("a", "c"), ("b", "d")]


def test_internal_conflicts_lists_each_pair_once():
    guests, resolver = build("abcd", exclusions=[exclusion("a", "c"), exclusion("c", "a"), exclusion("b", "d")])
    a, b, c, d = guests
    assert [(x.id, y.id) for x, y in resolver.internal_conflicts([a, b, c])] == [("a", "c")]
    assert resolver.internal_conflicts([a, b]) == []
