from fhirquery.search.type_queries.prefix import parse_number, number_range_query


def number_query(compiled, value):
    prefix, number, implicit_range = parse_number(value)
    return number_range_query(prefix, number, implicit_range, compiled.path)
