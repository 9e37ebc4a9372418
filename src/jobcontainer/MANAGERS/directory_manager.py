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
Lookup of the agent's well-known host directories.
"""
from enum import Enum
from typing import Dict, Protocol

from ..config import AgentSettings
from ..exceptions import DirectoryLookupError


class WellKnownDirectory(str, Enum):
    """
    Agent-managed directories that are mounted into every job container.
    """
    TOOLS = "tools"
    WORK = "work"
    ROOT = "root"


class DirectoryLookup(Protocol):
    """
    Supplies absolute host paths for the well-known directories.
    """
    def get_directory(self, directory: WellKnownDirectory) -> str:
        ...


class StaticDirectoryLookup:
    """
    Directory lookup over explicitly given paths.
    """
    def __init__(self, tools: str, work: str, root: str):
        self._directories: Dict[WellKnownDirectory, str] = {
            WellKnownDirectory.TOOLS: tools,
            WellKnownDirectory.WORK: work,
            WellKnownDirectory.ROOT: root,
        }

    def get_directory(self, directory: WellKnownDirectory) -> str:
        return self._directories[directory]


class EnvironmentDirectoryLookup:
    """
    Directory lookup backed by agent settings (environment and .env file).
    """
    def __init__(self, settings: AgentSettings):
        """
        :param settings: The loaded agent settings.
        """
        self.settings = settings

    def get_directory(self, directory: WellKnownDirectory) -> str:
        """
        Returns the configured path for a directory.

        :raises DirectoryLookupError: If the directory is not configured.
        """
        if directory is WellKnownDirectory.ROOT:
            path = self.settings.root_directory
        elif directory is WellKnownDirectory.WORK:
            path = self.settings.resolved_work_folder
        else:
            path = self.settings.resolved_tools_directory

        if not path:
            raise DirectoryLookupError(
                f"No {directory.value} directory configured; set AGENT_ROOTDIRECTORY"
            )
        return path
