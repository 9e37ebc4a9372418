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
Unit tests for the volume specification parser.
"""
import pytest
from pydantic import ValidationError
from jobcontainer.MODELS.mounts import MountVolume
from jobcontainer.PARSERS.volume_parser import VolumeSpecParser


class TestVolumeSpecParser:
    """Tests for VolumeSpecParser."""

    def test_target_only(self):
        """A single path is a pass-through mount."""
        mount = VolumeSpecParser.parse("/app")
        assert mount.source_volume_path is None
        assert mount.target_volume_path == "/app"
        assert mount.read_only is False

    def test_named_volume_only(self):
        mount = VolumeSpecParser.parse("myvolume")
        assert mount.source_volume_path is None
        assert mount.target_volume_path == "myvolume"
        assert mount.read_only is False

    def test_source_and_target(self):
        mount = VolumeSpecParser.parse("/data:/app")
        assert mount.source_volume_path == "/data"
        assert mount.target_volume_path == "/app"
        assert mount.read_only is False

    def test_read_only_target(self):
        """Test the :ro suffix on a target-only spec."""
        mount = VolumeSpecParser.parse("/data:ro")
        assert mount.source_volume_path is None
        assert mount.target_volume_path == "/data"
        assert mount.read_only is True

    def test_read_only_source_and_target(self):
        mount = VolumeSpecParser.parse("/data:/app:ro")
        assert mount.source_volume_path == "/data"
        assert mount.target_volume_path == "/app"
        assert mount.read_only is True

    def test_named_volume_read_only(self):
        mount = VolumeSpecParser.parse("name:/app:ro")
        assert mount.source_volume_path == "name"
        assert mount.target_volume_path == "/app"
        assert mount.read_only is True

    def test_read_only_suffix_is_case_insensitive(self):
        mount = VolumeSpecParser.parse("/data:/app:RO")
        assert mount.target_volume_path == "/app"
        assert mount.read_only is True

    def test_windows_source(self):
        """Test a drive-letter source with a unix target."""
        mount = VolumeSpecParser.parse("C:\\data:/app")
        assert mount.source_volume_path == "C:\\data"
        assert mount.target_volume_path == "/app"
        assert mount.read_only is False

    def test_windows_source_with_forward_slashes(self):
        mount = VolumeSpecParser.parse("d:/data:/app")
        assert mount.source_volume_path == "d:/data"
        assert mount.target_volume_path == "/app"

    def test_windows_source_and_target(self):
        """Both drive letters survive the split."""
        mount = VolumeSpecParser.parse("C:\\a:C:\\b:ro")
        assert mount.source_volume_path == "C:\\a"
        assert mount.target_volume_path == "C:\\b"
        assert mount.read_only is True

    def test_windows_target_only(self):
        mount = VolumeSpecParser.parse("C:\\data")
        assert mount.source_volume_path is None
        assert mount.target_volume_path == "C:\\data"

    def test_leading_colon_is_dropped(self):
        mount = VolumeSpecParser.parse(":/data:/app")
        assert mount.source_volume_path == "/data"
        assert mount.target_volume_path == "/app"

    def test_too_many_fields_pass_through(self):
        """Malformed specs degrade to a target-only mount instead of failing."""
        mount = VolumeSpecParser.parse("a:b:c")
        assert mount.source_volume_path is None
        assert mount.target_volume_path == "a:b:c"

    def test_colon_in_middle_of_path_is_a_separator(self):
        # only a single letter directly before the colon counts as a drive
        mount = VolumeSpecParser.parse("ab:/x")
        assert mount.source_volume_path == "ab"
        assert mount.target_volume_path == "/x"

    @pytest.mark.parametrize("spec", ["", ":", "::", ":ro", "\\", "C:", "C:\\", "a:\\:b"])
    def test_never_raises(self, spec):
        mount = VolumeSpecParser.parse(spec)
        assert isinstance(mount, MountVolume)

    def test_from_string(self):
        mount = MountVolume.from_string("/src:/dst:ro")
        assert mount == MountVolume(source_volume_path="/src", target_volume_path="/dst", read_only=True)

    def test_mount_is_immutable(self):
        mount = VolumeSpecParser.parse("/src:/dst")
        with pytest.raises(ValidationError):
            mount.read_only = True
