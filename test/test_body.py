from pytest import raises

from fhirquery import InvalidSearchParameter, SearchRequest, build_search_body


def test_search_body_defaults(registry):
    body = build_search_body(registry, SearchRequest("Patient", {"gender": "male"}))
    assert body["size"] == 20
    assert body["from"] == 0
    assert "sort" not in body
    assert len(body["query"]["bool"]["must"]) == 1


def test_search_body(registry):
    request = SearchRequest(
        "Patient",
        {"name": "Smith", "_count": "10", "_getpagesoffset": "30", "_sort": "-birthdate"},
    )
    filters = [{"term": {"resourceType": "Patient"}}]
    body = build_search_body(registry, request, filters)

    assert body["size"] == 10
    assert body["from"] == 30
    assert body["sort"][0] == {"birthDate": {"order": "desc", "unmapped_type": "long"}}
    assert body["query"]["bool"]["filter"] == filters
    assert body["query"]["bool"]["must"] == [
        {"multi_match": {"fields": ["name", "name.*"], "query": "Smith", "lenient": True}}
    ]


def test_search_body_invalid_count(registry):
    with raises(InvalidSearchParameter, match="_count must be an integer"):
        build_search_body(registry, SearchRequest("Patient", {"_count": "ten"}))


def test_search_body_negative_offset(registry):
    with raises(InvalidSearchParameter, match="_getpagesoffset must be positive"):
        build_search_body(registry, SearchRequest("Patient", {"_getpagesoffset": "-1"}))


def test_search_body_repeated_sort(registry):
    request = SearchRequest("Patient", {"_sort": ["birthdate", "-birthdate"]})
    with raises(InvalidSearchParameter, match="cannot be used multiple times"):
        build_search_body(registry, request)
