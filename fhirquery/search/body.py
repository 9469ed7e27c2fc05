from fhirquery.constants import (
    COUNT_PARAMETER,
    DEFAULT_COUNT,
    PAGES_OFFSET_PARAMETER,
    SORT_PARAMETER,
)
from fhirquery.errors import InvalidSearchParameter
from fhirquery.search.querybuilder import build_search_query
from fhirquery.search.searcharguments import normalize_query_params
from fhirquery.search.sort import build_sort_clause


def integer_param(params, name, default):
    values = params.get(name)
    if not values:
        return default
    try:
        value = int(values[0])
    except ValueError:
        raise InvalidSearchParameter(f"{name} must be an integer, got {values[0]}", param=name)
    if value < 0:
        raise InvalidSearchParameter(f"{name} must be positive, got {value}", param=name)
    return value


def build_search_body(registry, request, additional_filters=None):
    """Builds the body of the elasticsearch search request matching a search:
    the query, the pagination (_count, _getpagesoffset) and the sorting (_sort).
    """
    params = normalize_query_params(request.query_params)

    body = {
        "query": build_search_query(registry, request, additional_filters),
        "size": integer_param(params, COUNT_PARAMETER, DEFAULT_COUNT),
        "from": integer_param(params, PAGES_OFFSET_PARAMETER, 0),
    }
    if params.get(SORT_PARAMETER):
        sort_values = params[SORT_PARAMETER]
        sort_param = sort_values[0] if len(sort_values) == 1 else sort_values
        body["sort"] = build_sort_clause(registry, request.resource_type, sort_param)
    return body
