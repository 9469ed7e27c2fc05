from collections.abc import Mapping
from typing import Dict, List

from werkzeug.datastructures import MultiDict

from fhirquery.errors import InvalidSearchParameter


class SearchRequest:
    """A search on a resource type.

    Args:
        - resource_type: FHIR resource (eg: 'Patient')
        - query_params: search parameters as parsed from the url. Values may
        be a single string or a list of strings when the parameter is repeated
        (eg: {"name": "Smith", "birthdate": ["ge1970", "lt1980"]}).
        A werkzeug MultiDict (eg: flask's request.args) is also accepted.
    """

    def __init__(self, resource_type: str, query_params=None):
        self.resource_type = resource_type
        self.query_params = {} if query_params is None else query_params

    def __repr__(self):
        return f"SearchRequest({self.resource_type!r}, {self.query_params!r})"


def url_to_dict(url_args):
    if isinstance(url_args, MultiDict):
        return {key: url_args.getlist(key) for key in url_args.keys()}
    return url_args


def normalize_query_params(query_params) -> Dict[str, List[str]]:
    """Maps each search parameter to the ordered list of its values.
    A plain string becomes a single value, a list of strings is kept as is.
    """
    query_params = url_to_dict(query_params)
    if not isinstance(query_params, Mapping):
        raise InvalidSearchParameter("Search parameters must be a dictionary")

    normalized = {}
    for key, value in query_params.items():
        if isinstance(value, str):
            normalized[key] = [value]
        elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            normalized[key] = list(value)
        else:
            # happens when the router parses nested query strings
            # eg: Patient?name[key]=Smith -> {"name": {"key": "Smith"}}
            raise InvalidSearchParameter(f"Invalid search parameter: '{key}'", param=key)
    return normalized


def split_search_value(value: str) -> List[str]:
    """Splits a search value on commas (OR alternatives).
    A comma preceded by a backslash is kept as a literal comma.
    eg: "a,b" -> ["a", "b"], "a\\,b" -> ["a,b"], "a," -> ["a", ""]
    """
    alternatives = []
    current = []
    index = 0
    while index < len(value):
        char = value[index]
        if char == "\\" and value[index + 1 : index + 2] == ",":
            current.append(",")
            index += 2
            continue
        if char == ",":
            alternatives.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    alternatives.append("".join(current))
    return alternatives
