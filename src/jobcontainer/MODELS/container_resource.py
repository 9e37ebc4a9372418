# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Models for the container resource a job declares.
"""
from typing import Any, Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel

_TRUE_STRINGS = {"true", "1", "yes"}


class ServiceEndpointReference(BaseModel):
    """
    Reference to the registry service connection used to pull the image.
    """
    id: UUID
    name: Optional[str] = None


class ContainerResource(BaseModel):
    """
    A container as declared in the ``resources`` section of a job.

    Free-form settings such as ``image``, ``options``, ``localimage`` and
    ``command`` live in the properties bag.
    """
    alias: str
    endpoint: Optional[ServiceEndpointReference] = None
    properties: Dict[str, Any] = {}
    environment: Dict[str, str] = {}
    ports: List[str] = []
    volumes: List[str] = []

    def get_property(self, name: str, default: Any = None) -> Any:
        """
        Returns a property by name, or ``default`` when it is not set.
        """
        value = self.properties.get(name)
        return default if value is None else value

    def get_string_property(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Returns a property as a string. Scalars such as numbers are converted.
        """
        value = self.properties.get(name)
        return default if value is None else str(value)

    def get_bool_property(self, name: str, default: bool = False) -> bool:
        """
        Returns a property coerced to bool. Strings such as "true" or "0"
        are accepted since YAML authors often quote them.
        """
        value = self.properties.get(name)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        return str(value).strip().lower() in _TRUE_STRINGS
