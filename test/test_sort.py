from pytest import raises

from fhirquery import InvalidSearchParameter, build_sort_clause
from fhirquery.search import parse_sort_parameter


def test_parse_sort_parameter():
    assert parse_sort_parameter("-birthdate,_lastUpdated") == [
        ("birthdate", "desc"),
        ("_lastUpdated", "asc"),
    ]


def test_sort_ascending(registry):
    assert build_sort_clause(registry, "Patient", "birthdate") == [
        {"birthDate": {"order": "asc", "unmapped_type": "long"}},
        {"birthDate.start": {"order": "asc", "unmapped_type": "long"}},
    ]


def test_sort_descending(registry):
    """Descending sorts use the end of periods
    """
    assert build_sort_clause(registry, "Patient", "-birthdate") == [
        {"birthDate": {"order": "desc", "unmapped_type": "long"}},
        {"birthDate.end": {"order": "desc", "unmapped_type": "long"}},
    ]


def test_sort_multiple(registry):
    result = build_sort_clause(registry, "Observation", "-date,_lastUpdated")
    assert [list(clause)[0] for clause in result] == [
        "effectiveDateTime",
        "effectiveDateTime.end",
        "effectivePeriod",
        "effectivePeriod.end",
        "meta.lastUpdated",
        "meta.lastUpdated.start",
    ]


def test_sort_unknown_param(registry):
    with raises(InvalidSearchParameter, match="Unknown _sort parameter value: foo"):
        build_sort_clause(registry, "Patient", "foo")


def test_sort_not_a_date(registry):
    with raises(InvalidSearchParameter, match="Only date type parameters"):
        build_sort_clause(registry, "Patient", "-name")


def test_sort_repeated(registry):
    with raises(InvalidSearchParameter, match="cannot be used multiple times"):
        build_sort_clause(registry, "Patient", ["birthdate", "-birthdate"])
