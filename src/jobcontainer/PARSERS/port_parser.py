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
Parser for the output of ``docker port <container>``.
"""
import logging
import re
from typing import Iterable, List, Optional

from ..MODELS.mounts import PortMapping

logger = logging.getLogger(__name__)


class PortMappingParser:
    """
    Turns lines such as ``6379/tcp -> 0.0.0.0:32771`` into port mappings.
    """
    _PORT_LINE = re.compile(r"^(?P<container>\d+)/(?P<protocol>\w+)\s*->\s*(?P<address>.+):(?P<host>\d+)$")

    @classmethod
    def parse_line(cls, line: str) -> Optional[PortMapping]:
        """
        Parses a single line.

        :param line: One line of ``docker port`` output.
        :return: The mapping, or None if the line is not a port mapping.
        """
        match = cls._PORT_LINE.match(line.strip())
        if not match:
            return None
        return PortMapping(
            host_port=match.group("host"),
            container_port=match.group("container"),
            protocol=match.group("protocol"),
        )

    @classmethod
    def parse_lines(cls, lines: Iterable[str]) -> List[PortMapping]:
        """
        Parses every line, skipping blanks and anything unrecognised.
        """
        mappings = []
        for line in lines:
            if not line.strip():
                continue
            mapping = cls.parse_line(line)
            if mapping is None:
                logger.warning("Skipping unrecognised port mapping line: %r", line)
                continue
            mappings.append(mapping)
        return mappings
