from fhirquery.errors import InvalidSearchParameter


def parse_token(value):
    """Splits a token search value [system]|[code].

    Returns: a tuple (system, code, explicit_no_system)
        - "code"        -> (None, "code", False)
        - "system|code" -> ("system", "code", False)
        - "|code"       -> (None, "code", True): the token must not have a system
        - "system|"     -> ("system", None, False)
    """
    if value == "|":
        raise InvalidSearchParameter(f"Invalid token search parameter: {value}")
    parts = value.split("|")
    if len(parts) > 2:
        raise InvalidSearchParameter(f"Invalid token search parameter: {value}")
    if len(parts) == 1:
        return None, value, False

    system, code = parts
    return system or None, code or None, system == ""


def token_query(compiled, value):
    path = compiled.path
    system, code, explicit_no_system = parse_token(value)

    queries = []
    if system is not None:
        queries.append(
            {
                "multi_match": {
                    "fields": [f"{path}.system", f"{path}.coding.system"],
                    "query": system,
                    "lenient": True,
                }
            }
        )
    if code is not None:
        queries.append(
            {
                "multi_match": {
                    "fields": [f"{path}.code", f"{path}.coding.code", f"{path}.value", path],
                    "query": code,
                    "lenient": True,
                }
            }
        )
    if explicit_no_system:
        queries.append({"bool": {"must_not": {"exists": {"field": f"{path}.system"}}}})

    if len(queries) == 1:
        return queries[0]
    return {"bool": {"must": queries}}
