from .errors import FHIRQueryError, InvalidSearchParameter, RegistryError  # noqa
from .registry import SearchParametersRegistry, SearchParam, CompiledSearchParam  # noqa
from .search import (  # noqa
    SearchRequest,
    build_search_query,
    build_sort_clause,
    build_search_body,
)
