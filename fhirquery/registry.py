from glob import glob
import os
import json
import logging
from typing import Dict, List, Optional, Tuple, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from fhirquery.constants import SEARCH_PARAMETERS_FILES_DIR
from fhirquery.errors import RegistryError

# search parameters declared on this type apply to every resource type
BASE_RESOURCE_TYPE = "Resource"


class CompiledSearchParam(BaseModel):
    """
    One indexed field a search parameter resolves to.

    `condition` is a (field, operator, value) triple: the field designated by
    `path` belongs to an element of an array of objects on which `field` must
    also match `value`.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    resource_type: str = Field(alias="resourceType")
    path: str
    condition: Optional[Tuple[str, str, str]] = None


class SearchParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    # kept as free text: unsupported types fall back to string queries
    type: str
    description: Optional[str] = None
    compiled: List[CompiledSearchParam]


class SearchParametersRegistry:
    def __init__(self, search_params: Optional[Dict[str, List[Union[SearchParam, dict]]]] = None):
        self._search_params = {}
        for resource_type, params in (search_params or {}).items():
            self.register(resource_type, params)

    def register(self, resource_type: str, params: List[Union[SearchParam, dict]]):
        registered = self._search_params.setdefault(resource_type, {})
        for param in params:
            if not isinstance(param, SearchParam):
                param = SearchParam.model_validate(param)
            registered[param.name] = param

    @property
    def resource_types(self):
        return list(self._search_params.keys())

    def get_search_parameter(self, resource_type: str, name: str) -> Optional[SearchParam]:
        """
        Resolves a search parameter for a resource type, falling back
        on the parameters shared by all resources (eg: _id).

        Returns: the SearchParam or None if it is not defined.
        """
        param = self._search_params.get(resource_type, {}).get(name)
        if param is None:
            param = self._search_params.get(BASE_RESOURCE_TYPE, {}).get(name)
        return param

    def get_search_parameters(self, resource_type: str) -> List[SearchParam]:
        params = {
            **self._search_params.get(BASE_RESOURCE_TYPE, {}),
            **self._search_params.get(resource_type, {}),
        }
        return list(params.values())

    @classmethod
    def from_directory(cls, directory: Optional[str] = None) -> "SearchParametersRegistry":
        """
        Loads compiled search parameters from the JSON files of a directory.
        Each file has the form:
            {"resourceType": "Patient", "searchParameters": [{"name": ..., "type": ..., "compiled": [...]}]}

        Args:
            directory (optional): defaults to the SEARCH_PARAMETERS_FILES_DIR env variable.
        """
        directory = directory or SEARCH_PARAMETERS_FILES_DIR
        if not directory:
            raise RegistryError("SEARCH_PARAMETERS_FILES_DIR is not set and no directory was given")
        if not os.path.isdir(directory):
            raise RegistryError(f"Could not find search parameters directory: {directory}")

        logging.info(f"Loading search parameters from {directory}...")
        registry = cls()
        files = sorted(glob(os.path.join(directory, "*.json")))
        if not files:
            logging.warning(f"no search parameters definition found in {directory}")

        for filename in files:
            with open(filename, "r") as f:
                try:
                    definition = json.load(f)
                except json.JSONDecodeError as err:
                    raise RegistryError(f"{filename} is not a valid JSON file: {err}")

            resource_type = definition.get("resourceType") if isinstance(definition, dict) else None
            if not resource_type:
                raise RegistryError(f"{filename} is missing a resourceType")
            try:
                registry.register(resource_type, definition.get("searchParameters", []))
            except pydantic.ValidationError as err:
                raise RegistryError(f"{filename} contains invalid search parameters: {err}")

        return registry
