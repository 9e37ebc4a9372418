"""
Helpers for building names that are safe to hand to a container runtime.
"""
import string

_ALLOWED = frozenset(string.ascii_letters + string.digits + "_")


def sanitize(name: str, allow_hyphens: bool = False) -> str:
    """
    Drops every character that is not an ASCII letter, digit or underscore
    (or hyphen, when allowed).

    :param name: The name to clean up, e.g. an image reference.
    :param allow_hyphens: Keep '-' characters.
    :return: The sanitized name. May be empty.
    """
    if not name:
        return ""
    allowed = _ALLOWED | {"-"} if allow_hyphens else _ALLOWED
    return "".join(c for c in name if c in allowed)
