"""
Utilities for expanding pipeline variable macros in strings.
"""
import logging
import re
from typing import Dict, MutableMapping, Optional, Protocol

logger = logging.getLogger(__name__)


class VariableResolver(Protocol):
    """
    Anything that can expand variable references in container settings.
    """
    def expand_value(self, name: str, value: Optional[str]) -> Optional[str]:
        ...

    def expand_values(self, target: MutableMapping[str, str]) -> None:
        ...


class Variables:
    """
    Expands ``$(name)`` macros against a set of pipeline variables.
    Names are matched case-insensitively. Macros naming an unknown variable
    are left in place untouched.
    """
    # Group 1: variable name
    MACRO_PATTERN = re.compile(r"\$\(([^)]+)\)")

    def __init__(self, variables: Optional[Dict[str, str]] = None):
        """
        Initializes the resolver with the known variables.

        :param variables: Variable name to value.
        """
        self._variables = {k.lower(): v for k, v in (variables or {}).items()}

    def get(self, name: str) -> Optional[str]:
        return self._variables.get(name.lower())

    def set(self, name: str, value: str):
        self._variables[name.lower()] = value

    def expand_value(self, name: str, value: Optional[str]) -> Optional[str]:
        """
        Expands the macros in a single value.

        :param name: What the value is, used for diagnostics only.
        :param value: The string containing $(VAR) macros.
        :return: The expanded string. None stays None.
        """
        if not value:
            return value

        def replace(match):
            """
            Internal replacement function for re.sub.
            """
            resolved = self.get(match.group(1).strip())
            if resolved is None:
                return match.group(0)
            return resolved

        expanded = self.MACRO_PATTERN.sub(replace, value)
        if expanded != value:
            logger.debug("Expanded %s: %r -> %r", name, value, expanded)
        return expanded

    def expand_values(self, target: MutableMapping[str, str]) -> None:
        """
        Expands every value of ``target`` in place. Keys are left alone.
        """
        for key in list(target.keys()):
            target[key] = self.expand_value(key, target[key])
