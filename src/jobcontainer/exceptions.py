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
Errors raised while building a job container description.
"""


class ContainerConfigurationError(ValueError):
    """
    The container resource is not usable as given (for example, no image).
    These are configuration mistakes and are never retried.
    """


class DirectoryLookupError(LookupError):
    """
    A well-known agent directory could not be resolved.
    """
