import pytest

from tagmatch import ANY, ROOT, Family, MalformedPattern, PatternKind, _, classify


def _handler(subject):
    return subject


def test_classification(user: Family) -> None:
    assert classify((ANY, _handler)).kind is PatternKind.CATCH_ALL
    assert classify((_, _handler)).kind is PatternKind.CATCH_ALL
    assert classify((ROOT.wildcard(), _handler)).kind is PatternKind.CATCH_ALL
    assert classify((user.ACTIVE, _handler)).kind is PatternKind.TAG
    assert classify(("ACTIVE", _handler)).kind is PatternKind.TAG
    assert classify((user.wildcard(), _handler)).kind is PatternKind.INSTANCE_WILDCARD
    assert classify((user.ACTIVE("Jane"), _handler)).kind is PatternKind.EXACT
    assert classify((user.PENDING(), _handler)).kind is PatternKind.EXACT


def test_arg_wildcard_patterns_carry_their_count(user: Family) -> None:
    info = classify([user.ACTIVE("Tim", _, _), _handler])

    assert info.kind is PatternKind.ARG_WILDCARD
    assert info.arg_wildcards == 2
    assert info.handler is _handler


def test_malformed_pattern_keeps_the_offending_entry(user: Family) -> None:
    entry = (user.ACTIVE("Jane"), "not callable")
    with pytest.raises(MalformedPattern) as exc_info:
        classify(entry)

    assert exc_info.value.pattern is entry
    assert "not callable" in exc_info.value.reason
    assert isinstance(exc_info.value, TypeError)


@pytest.mark.parametrize("raw", [None, 3, {"a": 1}, (), (None, _handler), (3.5, _handler)])
def test_malformed_shapes(raw) -> None:
    with pytest.raises(MalformedPattern):
        classify(raw)
