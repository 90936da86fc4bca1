"""Read and write the generator's implementors fragment text.

A fragment is a small script::

    (function() {var implementors = {};
    implementors['rand'] = ["impl <a ...>Default</a> for ...",];
            if (window.register_implementors) { ... }
    })()

Only the ``implementors['<key>'] = [...]`` assignments carry data.  Item
strings are decoded from their literal form and otherwise left untouched.
"""

from __future__ import annotations

import json
import re

from impl_index.bridge.models import Contribution


class FragmentParseError(ValueError):
    """Fragment text does not have the generator's shape."""


_PRELUDE_RE = re.compile(r"var\s+implementors\s*=\s*\{\s*\}\s*;")
_ASSIGN_RE = re.compile(
    r"implementors\[\s*"
    r"(?:'(?P<sq>(?:[^\\']|\\.)*)'|\"(?P<dq>(?:[^\\\"]|\\.)*)\")"
    r"\s*\]\s*=\s*\[",
    re.S,
)
_ASSIGN_START_RE = re.compile(r"implementors\[")
_STRING_RE = re.compile(r'"((?:[^"\\]|\\.)*)"', re.S)
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.S)
_WS_RE = re.compile(r"\s*")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    # line continuations
    "\n": "",
    "\r": "",
    "\r\n": "",
    "\u2028": "",
    "\u2029": "",
}

TRAILER = (
    "\n\n"
    "            if (window.register_implementors) {\n"
    "                window.register_implementors(implementors);\n"
    "            } else {\n"
    "                window.pending_implementors = implementors;\n"
    "            }\n"
    "        \n"
    "})()\n"
)


def _unescape(body: str) -> str:
    def repl(m: re.Match[str]) -> str:
        esc = m.group(1)
        if esc[0] in "ux" and len(esc) > 1:
            return chr(int(esc[1:], 16))
        return _SIMPLE_ESCAPES.get(esc, esc)

    decoded = _ESCAPE_RE.sub(repl, body)
    # \uXXXX pairs may spell a surrogate pair
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def _skip_ws(text: str, pos: int) -> int:
    return _WS_RE.match(text, pos).end()


def _parse_items(text: str, pos: int, key: str) -> tuple[list[str], int]:
    """Parse list items starting just after ``[``; return items and the end offset."""
    items: list[str] = []
    while True:
        pos = _skip_ws(text, pos)
        if text.startswith("]", pos):
            return items, pos + 1
        m = _STRING_RE.match(text, pos)
        if m is None:
            raise FragmentParseError(
                f"expected string literal in implementors['{key}'] at offset {pos}"
            )
        items.append(_unescape(m.group(1)))
        pos = _skip_ws(text, m.end())
        if text.startswith(",", pos):
            pos += 1
        elif not text.startswith("]", pos):
            raise FragmentParseError(
                f"expected ',' or ']' in implementors['{key}'] at offset {pos}"
            )


def parse_fragment(text: str) -> Contribution:
    """Extract the contribution from fragment *text*.

    Assigning the same key twice keeps the key's first position and the
    last value, as a script object literal would.
    """
    prelude = _PRELUDE_RE.search(text)
    if prelude is None:
        raise FragmentParseError("missing 'var implementors = {};' prelude")

    contribution: Contribution = {}
    pos = prelude.end()
    while True:
        start = _ASSIGN_START_RE.search(text, pos)
        if start is None:
            break
        m = _ASSIGN_RE.match(text, start.start())
        if m is None:
            raise FragmentParseError(
                f"malformed implementors assignment at offset {start.start()}"
            )
        key = _unescape(m.group("sq") if m.group("sq") is not None else m.group("dq"))
        items, pos = _parse_items(text, m.end(), key)
        contribution[key] = items
    return contribution


def _quote_key(key: str) -> str:
    return "'" + key.replace("\\", "\\\\").replace("'", "\\'") + "'"


def render_fragment(contribution: Contribution) -> str:
    """Write *contribution* in the generator's fragment format."""
    parts = ["(function() {var implementors = {};\n"]
    for key, items in contribution.items():
        body = "".join(json.dumps(item, ensure_ascii=False) + "," for item in items)
        parts.append(f"implementors[{_quote_key(key)}] = [{body}];")
    parts.append(TRAILER)
    return "".join(parts)
