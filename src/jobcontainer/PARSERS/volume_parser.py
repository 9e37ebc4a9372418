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
Parser for Docker-style volume specifications (``[source:]target[:ro]``).
"""
import logging
import re
from typing import List

from ..MODELS.mounts import MountVolume

logger = logging.getLogger(__name__)


class VolumeSpecParser:
    """
    Parses volume strings into mounts.

    The colon separates fields but is also part of a Windows drive letter,
    so drive-letter colons are escaped before splitting and restored while
    folding the fragments back together. Parsing never fails: anything that
    does not split into exactly a source and a target is passed through as
    the target.
    """
    READ_ONLY_SUFFIX = ":ro"

    # X:\ or X:/ at the start of the string or right after a field separator
    _DRIVE_LETTER = re.compile(r"(^|:)([a-zA-Z]):(\\|/)")

    @classmethod
    def parse(cls, volume: str) -> MountVolume:
        """
        Parses a volume specification.

        :param volume: The raw specification, e.g. ``C:\\data:/app:ro``.
        :return: The parsed mount.
        """
        read_only = False
        if volume.lower().endswith(cls.READ_ONLY_SUFFIX):
            read_only = True
            volume = volume[:-len(cls.READ_ONLY_SUFFIX)]
        if volume.startswith(":"):
            volume = volume[1:]

        fields = cls._split(cls._escape_drive_letters(volume))

        if len(fields) == 2:
            mount = MountVolume(
                source_volume_path=fields[0],
                target_volume_path=fields[1],
                read_only=read_only,
            )
        else:
            mount = MountVolume(target_volume_path=volume, read_only=read_only)

        logger.debug("Parsed volume spec %r as %s -> %s (read_only=%s)",
                     volume, mount.source_volume_path, mount.target_volume_path, read_only)
        return mount

    @classmethod
    def _escape_drive_letters(cls, volume: str) -> str:
        return cls._DRIVE_LETTER.sub(r"\1\2\\:\3", volume)

    @staticmethod
    def _split(volume: str) -> List[str]:
        """
        Splits on colons, honoring colons escaped with a trailing backslash.
        """
        fields: List[str] = []
        join_next = False
        for fragment in volume.split(":"):
            if join_next:
                # drop the escape backslash and put the colon back
                fields[-1] = fields[-1][:-1] + ":" + fragment
                join_next = False
            else:
                fields.append(fragment)
            if fragment.endswith("\\"):
                join_next = True
        return fields
