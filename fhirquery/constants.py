import os

from yarl import URL

FHIR_SERVICE_BASE_URL = URL(os.getenv("FHIR_SERVICE_BASE_URL", "https://arkhn.com/fhir"))
SEARCH_PARAMETERS_FILES_DIR = os.getenv("SEARCH_PARAMETERS_FILES_DIR")

COUNT_PARAMETER = "_count"
PAGES_OFFSET_PARAMETER = "_getpagesoffset"
SORT_PARAMETER = "_sort"

DEFAULT_COUNT = 20

# transport / formatting parameters, never backed by an indexed field
NON_SEARCHABLE_PARAMETERS = [
    COUNT_PARAMETER,
    PAGES_OFFSET_PARAMETER,
    SORT_PARAMETER,
    "_include",
    "_revinclude",
    "_format",
    "_summary",
    "_elements",
]
