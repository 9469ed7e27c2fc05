import re

from yarl import URL

from fhirquery import constants
from fhirquery.errors import InvalidSearchParameter

RELATIVE_REFERENCE_REGEX = re.compile(r"^[A-Z][A-Za-z]+/[A-Za-z0-9\-.]{1,64}$")


def relative_reference(url: URL):
    """Returns the Type/id form of an absolute url served by this FHIR API,
    None if the url points somewhere else.
    """
    base_url = constants.FHIR_SERVICE_BASE_URL
    if url.origin() != base_url.origin():
        return None
    prefix = base_url.path.rstrip("/") + "/"
    if not url.path.startswith(prefix):
        return None
    relative = url.path[len(prefix) :]
    return relative if RELATIVE_REFERENCE_REGEX.match(relative) else None


def reference_query(compiled, value):
    field = f"{compiled.path}.reference"

    if RELATIVE_REFERENCE_REGEX.match(value):
        references = [value, str(constants.FHIR_SERVICE_BASE_URL / value)]
        return {"terms": {field: references}}

    try:
        url = URL(value)
    except ValueError:
        raise InvalidSearchParameter(f"Invalid reference search parameter: {value}")

    if url.scheme in ("http", "https") and url.host:
        references = [value]
        relative = relative_reference(url)
        if relative:
            references.append(relative)
        return {"terms": {field: references}}
    elif url.scheme:
        # urn:uuid:..., urn:oid:...
        return {"terms": {field: [value]}}

    # a bare id is matched against the id captured by the reference analyzer
    return {"match": {field: value}}
