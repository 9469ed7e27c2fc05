from .searcharguments import SearchRequest, normalize_query_params, split_search_value  # noqa
from .querybuilder import (  # noqa
    build_search_query,
    search_param_query,
    type_query_with_conditions,
)
from .sort import build_sort_clause, parse_sort_parameter  # noqa
from .body import build_search_body  # noqa
