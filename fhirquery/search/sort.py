from fhirquery.errors import InvalidSearchParameter


def parse_sort_parameter(sort_param):
    """Parses a _sort value into a list of (search parameter, order).
    A "-" before a parameter sorts it by descending order.
    eg: "-birthdate,_lastUpdated" -> [("birthdate", "desc"), ("_lastUpdated", "asc")]
    """
    sorting_params = []
    for argument in sort_param.split(","):
        if argument.startswith("-"):
            sorting_params.append((argument[1:], "desc"))
        else:
            sorting_params.append((argument, "asc"))
    return sorting_params


def elasticsearch_sort(field, order):
    # unmapped_type avoids failures on indices where the field was never mapped
    return {field: {"order": order, "unmapped_type": "long"}}


def build_sort_clause(registry, resource_type, sort_param):
    """Translates a _sort search parameter to an elasticsearch sort clause.
    Only date search parameters can be used for sorting. Periods are sorted
    by their start when ascending and by their end when descending.
    """
    if not isinstance(sort_param, str):
        raise InvalidSearchParameter(
            "_sort parameter cannot be used multiple times on a search query", param="_sort"
        )

    sort_clause = []
    for name, order in parse_sort_parameter(sort_param):
        search_param = registry.get_search_parameter(resource_type, name)
        if search_param is None:
            raise InvalidSearchParameter(
                f"Unknown _sort parameter value: {name}. "
                "Sort parameters values must use a valid Search Parameter",
                param="_sort",
            )
        if search_param.type != "date":
            raise InvalidSearchParameter(
                f"Invalid _sort parameter: {name}. "
                "Only date type parameters can currently be used for sorting",
                param="_sort",
            )
        period_bound = "start" if order == "asc" else "end"
        for compiled in search_param.compiled:
            sort_clause.append(elasticsearch_sort(compiled.path, order))
            sort_clause.append(elasticsearch_sort(f"{compiled.path}.{period_bound}", order))
    return sort_clause
