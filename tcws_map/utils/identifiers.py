"""Area name → map feature identifier normalization.

Province features are keyed by the province name with spaces replaced by
underscores (``Camarines_Sur``). Municipality features are keyed as
``<province>+<municipality>`` (``Cebu+Mandaue_City``).
"""

from __future__ import annotations

import re

# Separator between the province and municipality parts of an identifier.
SEPARATOR = "+"

# Bulletin province names that the map knows under another name. Applied to
# every province name, whether it stands alone or as a parent.
PROVINCE_ALIASES: dict[str, str] = {
    "Compostela Valley": "Davao de Oro",
}

_WHITESPACE_RE = re.compile(r"\s+")
_CITY_OF_RE = re.compile(r"^City of (.+)$", re.IGNORECASE)
_SAFE_CHAR_RE = re.compile(r"[A-Za-z0-9_\-]")
_ESCAPE_RE = re.compile(r"\\([0-9A-Fa-f]{1,6}) ?|\\(.)")


def _underscore(name: str) -> str:
    return _WHITESPACE_RE.sub("_", name.strip())


def _province(name: str) -> str:
    name = name.strip()
    return PROVINCE_ALIASES.get(name, name)


def area_id(name: str, parent: str | None = None) -> str:
    """Map an area name (and optionally its province) to a feature identifier.

    >>> area_id("Camarines Sur")
    'Camarines_Sur'
    >>> area_id("City of Mandaue", "Cebu")
    'Cebu+Mandaue_City'
    """
    if parent is None:
        return _underscore(_province(name))

    child = name.strip()
    city = _CITY_OF_RE.match(child)
    if city:
        child = f"{city.group(1)} City"

    return f"{_underscore(_province(parent))}{SEPARATOR}{_underscore(child)}"


def parent_of(identifier: str) -> str | None:
    """Province part of a municipality identifier, or None for provinces."""
    if SEPARATOR not in identifier:
        return None
    return identifier.split(SEPARATOR, 1)[0]


def escape_selector(identifier: str) -> str:
    """Escape an identifier for use as a ``#id`` selector token."""
    out: list[str] = []
    for i, ch in enumerate(identifier):
        if i == 0 and ch.isdigit():
            # A leading digit is only legal as a hex code point escape.
            out.append(f"\\{ord(ch):x} ")
        elif _SAFE_CHAR_RE.match(ch) or ord(ch) > 0x7F:
            out.append(ch)
        else:
            out.append("\\" + ch)
    return "".join(out)


def unescape_selector(token: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        if match.group(1) is not None:
            return chr(int(match.group(1), 16))
        return match.group(2)

    return _ESCAPE_RE.sub(_replace, token)
