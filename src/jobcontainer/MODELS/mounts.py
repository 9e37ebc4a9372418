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
Models for the mounts, ports and path mappings of a job container.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class MountVolume(BaseModel):
    """
    A volume mounted into the container.

    A mount without a source is a pass-through mount: the runtime decides
    where the target is backed from.
    """
    model_config = ConfigDict(frozen=True)

    source_volume_path: Optional[str] = None
    target_volume_path: str
    read_only: bool = False

    @classmethod
    def from_string(cls, volume: str) -> "MountVolume":
        """
        Builds a mount from a Docker-style ``[source:]target[:ro]`` string.

        :param volume: The raw volume specification.
        :return: The parsed mount.
        """
        from ..PARSERS.volume_parser import VolumeSpecParser
        return VolumeSpecParser.parse(volume)


class PortMapping(BaseModel):
    """
    A container port published on the host.
    """
    model_config = ConfigDict(frozen=True)

    host_port: str
    container_port: str
    protocol: str


class PathMapping(BaseModel):
    """
    One host directory and the short path it is mounted at in the container.
    """
    model_config = ConfigDict(frozen=True)

    host_prefix: str
    container_prefix: str
