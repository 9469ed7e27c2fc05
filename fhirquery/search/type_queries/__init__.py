from .string import string_query  # noqa
from .date import date_query  # noqa
from .token import token_query, parse_token  # noqa
from .number import number_query  # noqa
from .quantity import quantity_query  # noqa
from .reference import reference_query  # noqa
