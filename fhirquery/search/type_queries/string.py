def string_query(compiled, value):
    """Matches the value against the field and all of its sub-fields
    (eg: name matches name.family, name.given...)
    """
    return {
        "multi_match": {
            "fields": [compiled.path, f"{compiled.path}.*"],
            "query": value,
            "lenient": True,
        }
    }
