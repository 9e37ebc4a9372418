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
Translation of paths between the agent host and a job container.
"""
import logging
import sys
from enum import Enum
from typing import Iterable, Optional, Tuple

from ..MODELS.mounts import PathMapping

logger = logging.getLogger(__name__)


class TargetPlatform(str, Enum):
    """
    The platform the agent and its containers run on. It decides how paths
    are compared and which implicit mounts a job container gets.
    """
    LINUX = "linux"
    WINDOWS = "windows"

    @classmethod
    def current(cls) -> "TargetPlatform":
        """
        Returns the platform of the running interpreter.
        """
        if sys.platform.startswith("win"):
            return cls.WINDOWS
        return cls.LINUX

    @property
    def case_sensitive(self) -> bool:
        return self is not TargetPlatform.WINDOWS

    @property
    def separators(self) -> Tuple[str, ...]:
        if self is TargetPlatform.WINDOWS:
            return ("\\", "/")
        return ("/",)


class PathTranslator:
    """
    Rewrites path prefixes between host and container.

    Mappings are tried in order and the first match wins, so when prefixes
    can nest the more specific one must come first. Paths outside every
    mapped prefix are returned unchanged.
    """

    def __init__(self, mappings: Iterable[PathMapping], platform: Optional[TargetPlatform] = None):
        """
        :param mappings: Ordered host/container prefix pairs.
        :param platform: Platform whose comparison rules apply. Defaults to
            the current one.
        """
        self.mappings: Tuple[PathMapping, ...] = tuple(mappings)
        self.platform = platform or TargetPlatform.current()
        for mapping in self.mappings:
            logger.debug("Path mapping %s <-> %s", mapping.host_prefix, mapping.container_prefix)

    def to_container_path(self, path: Optional[str]) -> Optional[str]:
        """
        Translates a host path to the path it has inside the container.
        """
        return self._translate(path, ((m.host_prefix, m.container_prefix) for m in self.mappings))

    def to_host_path(self, path: Optional[str]) -> Optional[str]:
        """
        Translates a container path back to the host path.
        """
        return self._translate(path, ((m.container_prefix, m.host_prefix) for m in self.mappings))

    def _translate(self, path, pairs) -> Optional[str]:
        if not path:
            return path

        for source, replacement in pairs:
            if self._equals(path, source):
                return replacement
            for separator in self.platform.separators:
                if self._starts_with(path, source + separator):
                    return replacement + path[len(source):]

        return path

    def _equals(self, left: str, right: str) -> bool:
        if self.platform.case_sensitive:
            return left == right
        return left.lower() == right.lower()

    def _starts_with(self, path: str, prefix: str) -> bool:
        if self.platform.case_sensitive:
            return path.startswith(prefix)
        return path[:len(prefix)].lower() == prefix.lower()
