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
Description of the container a job, or one of its service containers, runs in.
"""
import logging
import uuid
from typing import Dict, Iterable, List, Optional

from ..exceptions import ContainerConfigurationError
from ..MANAGERS.directory_manager import DirectoryLookup, WellKnownDirectory
from ..MODELS.container_resource import ContainerResource
from ..MODELS.mounts import MountVolume, PathMapping, PortMapping
from ..PARSERS.volume_parser import VolumeSpecParser
from ..UTILS.name_validation import sanitize
from ..UTILS.path_translator import PathTranslator, TargetPlatform
from ..UTILS.string_interpolation import VariableResolver

logger = logging.getLogger(__name__)

DOCKER_SOCKET = "/var/run/docker.sock"

# Short in-container paths for the well-known directories
CONTAINER_DIRECTORIES = {
    TargetPlatform.LINUX: {
        WellKnownDirectory.TOOLS: "/__t",
        WellKnownDirectory.WORK: "/__w",
        WellKnownDirectory.ROOT: "/__a",
    },
    TargetPlatform.WINDOWS: {
        WellKnownDirectory.TOOLS: "C:\\__t",
        WellKnownDirectory.WORK: "C:\\__w",
        WellKnownDirectory.ROOT: "C:\\__a",
    },
}


def build_path_translator(directories: DirectoryLookup, platform: TargetPlatform) -> PathTranslator:
    """
    Maps the tools, work and root host directories, in that order, to their
    short paths inside the container. The lookup is queried once.
    """
    container_dirs = CONTAINER_DIRECTORIES[platform]
    return PathTranslator(
        [
            PathMapping(host_prefix=directories.get_directory(kind), container_prefix=container_dirs[kind])
            for kind in (WellKnownDirectory.TOOLS, WellKnownDirectory.WORK, WellKnownDirectory.ROOT)
        ],
        platform,
    )


class ContainerInfo:
    """
    Everything the runtime layer needs to create a job or service container.

    Built from the declared container resource, then resolved once by
    :meth:`expand_properties` when pipeline variables are available. Declared
    ports and volumes are kept keyed by their literal text; the values are
    what gets expanded.
    """

    def __init__(self,
                 directories: DirectoryLookup,
                 container: ContainerResource,
                 is_job_container: bool = True,
                 platform: Optional[TargetPlatform] = None):
        """
        :param directories: Lookup for the agent's well-known host directories.
        :param container: The declared container resource.
        :param is_job_container: False for service containers.
        :param platform: Platform rules to apply. Defaults to the current one.
        :raises ContainerConfigurationError: If no image is declared.
        """
        image = container.get_string_property("image")
        if not image:
            raise ContainerConfigurationError(
                f"Container '{container.alias}' does not specify an image"
            )

        self.platform = platform or TargetPlatform.current()
        self.container_name: str = container.alias
        self.container_image: str = image
        self.container_display_name = (
            f"{container.alias}_{sanitize(image)}_{uuid.uuid4().hex[:6]}"
        )
        self.container_registry_endpoint: uuid.UUID = (
            container.endpoint.id if container.endpoint else uuid.UUID(int=0)
        )
        self.container_create_options: Optional[str] = container.get_string_property("options")
        self.skip_container_image_pull: bool = container.get_bool_property("localimage")
        self.container_command: str = container.get_string_property("command", "")
        self.is_job_container = is_job_container

        # Filled in by the runtime layer once the container exists
        self.container_id: Optional[str] = None
        self.container_network: Optional[str] = None
        self.container_network_alias: Optional[str] = None
        self.container_bring_node_path: Optional[str] = None
        self.current_user_name: Optional[str] = None
        self.current_user_id: Optional[str] = None

        self.container_environment_variables: Dict[str, str] = dict(container.environment)
        self.user_port_mappings: Dict[str, str] = {}
        self.user_mount_volumes: Dict[str, str] = {}
        self.port_mappings: List[PortMapping] = []
        self.mount_volumes: List[MountVolume] = []

        self._translator = build_path_translator(directories, self.platform)

        # TODO: mount \\.\pipe\docker_engine on Windows once named pipe mounts are supported
        if self.is_job_container and self.platform is TargetPlatform.LINUX:
            self.mount_volumes.append(
                MountVolume(source_volume_path=DOCKER_SOCKET, target_volume_path=DOCKER_SOCKET)
            )

        for port in container.ports:
            self.user_port_mappings[port] = port
        for volume in container.volumes:
            self.user_mount_volumes[volume] = volume

        logger.debug("Declared container %s (image %s, job container: %s)",
                     self.container_display_name, image, is_job_container)

    @property
    def path_mappings(self):
        return self._translator.mappings

    def translate_to_container_path(self, path: Optional[str]) -> Optional[str]:
        """
        Translates a host path into the container's view of it.
        """
        return self._translator.to_container_path(path)

    def translate_to_host_path(self, path: Optional[str]) -> Optional[str]:
        """
        Translates a path inside the container back to the host.
        """
        return self._translator.to_host_path(path)

    def add_port_mappings(self, port_mappings: Iterable[PortMapping]):
        """
        Records ports the runtime published for this container.
        """
        self.port_mappings.extend(port_mappings)

    def expand_properties(self, variables: VariableResolver):
        """
        Resolves variable macros in the declared settings.

        Volume strings are parsed only after they are expanded, so macro
        text never reaches the colon splitting.

        :param variables: The resolver to expand with. Its errors propagate.
        """
        variables.expand_values(self.user_port_mappings)

        variables.expand_values(self.user_mount_volumes)
        for volume in self.user_mount_volumes.values():
            self.mount_volumes.append(VolumeSpecParser.parse(volume))

        variables.expand_values(self.container_environment_variables)

        self.container_image = variables.expand_value("ContainerImage", self.container_image)
        self.container_create_options = variables.expand_value(
            "ContainerCreateOptions", self.container_create_options
        )
        logger.debug("Resolved container %s: %d mount(s), image %s",
                     self.container_display_name, len(self.mount_volumes), self.container_image)
