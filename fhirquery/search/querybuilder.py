import logging

from fhirquery.constants import NON_SEARCHABLE_PARAMETERS
from fhirquery.errors import InvalidSearchParameter
from fhirquery.search.searcharguments import normalize_query_params, split_search_value
from fhirquery.search.type_queries import (
    string_query,
    date_query,
    token_query,
    number_query,
    quantity_query,
    reference_query,
)

TYPE_QUERIES = {
    "string": string_query,
    "date": date_query,
    "token": token_query,
    "number": number_query,
    "quantity": quantity_query,
    "reference": reference_query,
}

# types without a dedicated query, searched as strings
STRING_FALLBACK_TYPES = ["composite", "special", "uri"]


def condition_query(condition):
    field, _, value = condition
    return {"multi_match": {"fields": [field, f"{field}.*"], "query": value, "lenient": True}}


def type_query_with_conditions(search_param, compiled, value):
    """Builds the query matching a single value against one of the fields
    of a search parameter.
    """
    type_query = TYPE_QUERIES.get(search_param.type)
    if type_query is None:
        if search_param.type not in STRING_FALLBACK_TYPES:
            logging.warning(
                f"unsupported type {search_param.type} for search parameter "
                f"{search_param.name}, searching it as a string"
            )
        type_query = string_query
    query = type_query(compiled, value)

    # Conditions are set on fields belonging to an array of objects: the condition
    # field of the same element should match too. A nested query would be exact
    # but requires nested mappings, so both are matched independently and the
    # results may include documents where they match on different elements.
    if compiled.condition is not None:
        return {"bool": {"must": [query, condition_query(compiled.condition)]}}
    return query


def search_param_query(search_param, value):
    """Translates a (search parameter, value) pair to a query.
    Comma separated alternatives are OR'ed in a bool.should, each of them
    must match all the compiled fields of the search parameter.
    """
    alternatives = []
    for alternative in split_search_value(value):
        queries = [
            type_query_with_conditions(search_param, compiled, alternative)
            for compiled in search_param.compiled
        ]
        alternatives.append(queries[0] if len(queries) == 1 else queries)

    if len(alternatives) == 1:
        return alternatives[0]
    return {"bool": {"should": alternatives}}


def search_request_query(registry, request):
    must = []
    for name, values in normalize_query_params(request.query_params).items():
        if name in NON_SEARCHABLE_PARAMETERS:
            continue
        search_param = registry.get_search_parameter(request.resource_type, name)
        if search_param is None:
            raise InvalidSearchParameter(
                f"Invalid search parameter '{name}' for resource type {request.resource_type}",
                param=name,
            )
        must.extend(search_param_query(search_param, value) for value in values)
    return must


def build_search_query(registry, request, additional_filters=None):
    """Translates a search request to an elasticsearch bool query.

    Args:
        - registry: resolves (resource type, name) to a SearchParam
        - request: the SearchRequest
        - additional_filters (optional): pre-built queries added as filters
        (they restrict the results without affecting the score)

    Returns: {"bool": {"filter": [...], "must": [...]}} with one "must" clause
    per searched (parameter, value) pair.
    """
    query = {
        "bool": {
            "filter": list(additional_filters or []),
            "must": search_request_query(registry, request),
        }
    }
    logging.debug(f"search on {request.resource_type} translated to {query}")
    return query
