"""
Naming helpers for generated source: display names to identifiers, and
free text to quoted Python string literals.
"""

import re

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^a-z0-9]")

_LITERAL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def sanitize_identifier(display_name: str) -> str:
    """
    Lower-case a display name and replace every character outside [a-z0-9]
    with an underscore. Trailing underscores are dropped unless nothing else
    is left, so "My Agent!" and "my-agent" both become "my_agent" while "!!"
    stays "__".

    Idempotent, but not injective: distinct names may map to the same
    identifier and no disambiguation is attempted.
    """
    identifier = _INVALID_IDENTIFIER_CHARS.sub("_", display_name.lower())
    return identifier.rstrip("_") or identifier


def python_string(text: str) -> str:
    """Render text as a double-quoted Python string literal."""
    return '"' + "".join(_LITERAL_ESCAPES.get(ch, ch) for ch in text) + '"'
