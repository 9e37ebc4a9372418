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
Parser for container resources declared in pipeline YAML.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

import yaml

from ..exceptions import ContainerConfigurationError
from ..MODELS.container_resource import ContainerResource, ServiceEndpointReference

logger = logging.getLogger(__name__)

# YAML keys that land in the properties bag, with the bag key they map to
_PROPERTY_KEYS = {
    "image": "image",
    "options": "options",
    "localImage": "localimage",
    "localimage": "localimage",
    "command": "command",
}


class ContainerResourceParser:
    """
    Reads container resources, either a single container mapping or a
    ``resources: containers:`` list. Values are kept verbatim; variable
    macros are expanded later by the container description.
    """

    def parse(self, path: str, alias: Optional[str] = None) -> ContainerResource:
        """
        Parses a container resource from a YAML file.

        :param path: Path to the YAML file.
        :param alias: Which container to pick when the file declares several.
        :return: The container resource.
        """
        with open(path, 'r') as f:
            content = f.read()
        return self.parse_from_string(content, alias)

    def parse_from_string(self, content: str, alias: Optional[str] = None) -> ContainerResource:
        """
        Parses a container resource from YAML text.
        """
        data = yaml.safe_load(content) or {}
        if not isinstance(data, dict):
            raise ContainerConfigurationError("Container resource must be a YAML mapping")

        resources = data.get('resources') or {}
        containers = resources.get('containers') if isinstance(resources, dict) else None
        if not containers:
            return self._parse_container(data)

        for spec in containers:
            if not isinstance(spec, dict):
                raise ContainerConfigurationError(f"Container entries must be mappings, got {spec!r}")
            if alias is None or spec.get('container') == alias:
                return self._parse_container(spec)
        raise ContainerConfigurationError(f"No container named '{alias}' in resources")

    def _parse_container(self, spec: Dict[str, Any]) -> ContainerResource:
        """
        Converts one container mapping into a ContainerResource.
        """
        alias = spec.get('container') or spec.get('alias')
        if not alias:
            raise ContainerConfigurationError("Container resource has no 'container' name")

        properties = {}
        for key, bag_key in _PROPERTY_KEYS.items():
            if spec.get(key) is not None:
                value = spec[key]
                # localimage stays a bool; the rest are read as strings
                properties[bag_key] = value if bag_key == "localimage" else str(value)

        endpoint = None
        if spec.get('endpoint'):
            try:
                endpoint = ServiceEndpointReference(id=uuid.UUID(str(spec['endpoint'])))
            except ValueError as e:
                raise ContainerConfigurationError(f"Invalid endpoint id for container '{alias}': {e}") from e

        environment = {str(k): self._to_env_value(v) for k, v in (spec.get('env') or {}).items()}

        resource = ContainerResource(
            alias=str(alias),
            endpoint=endpoint,
            properties=properties,
            environment=environment,
            ports=self._to_list(spec.get('ports')),
            volumes=self._to_list(spec.get('volumes')),
        )
        logger.debug("Parsed container resource %s", resource.alias)
        return resource

    def _to_list(self, val: Any) -> List[str]:
        """
        Helper to ensure a value is a list of strings.
        """
        if val is None:
            return []
        if isinstance(val, str):
            return [val]
        return [str(v) for v in val]

    def _to_env_value(self, val: Any) -> str:
        """
        Renders a YAML scalar the way it was written, so true stays "true".
        """
        if val is None:
            return ''
        if isinstance(val, bool):
            return str(val).lower()
        return str(val)
