from fhirquery.search.type_queries.prefix import parse_date, prefix_range_query, format_date


def date_query(compiled, value):
    """Translates a [prefix]date search value to a range query.
    The searched date is considered as the whole period matching its precision
    (eg: "eq1974-12" matches any date in december 1974).
    """
    prefix, start, end = parse_date(value)
    return prefix_range_query(prefix, compiled.path, format_date(start), format_date(end))
