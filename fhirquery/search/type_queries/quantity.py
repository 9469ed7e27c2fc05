from fhirquery.errors import InvalidSearchParameter
from fhirquery.search.type_queries.prefix import parse_number, number_range_query


def quantity_query(compiled, value):
    """Translates a [prefix]number|system|code search value.
    eg: "le5.4|http://unitsofmeasure.org|mg" or "5.4||mg" or "5.4"
    """
    parts = value.split("|")
    if len(parts) == 1:
        number, system, code = parts[0], None, None
    elif len(parts) == 3:
        number, system, code = parts
    else:
        raise InvalidSearchParameter(f"Invalid quantity search parameter: {value}")

    path = compiled.path
    prefix, number, implicit_range = parse_number(number)
    queries = [number_range_query(prefix, number, implicit_range, f"{path}.value")]

    if system and code:
        queries.append({"multi_match": {"fields": [f"{path}.code"], "query": code, "lenient": True}})
        queries.append(
            {"multi_match": {"fields": [f"{path}.system"], "query": system, "lenient": True}}
        )
    elif code:
        # without a system, the code may as well be the human readable unit
        queries.append(
            {
                "multi_match": {
                    "fields": [f"{path}.code", f"{path}.unit"],
                    "query": code,
                    "lenient": True,
                }
            }
        )
    elif system:
        queries.append(
            {"multi_match": {"fields": [f"{path}.system"], "query": system, "lenient": True}}
        )

    if len(queries) == 1:
        return queries[0]
    return {"bool": {"must": queries}}
