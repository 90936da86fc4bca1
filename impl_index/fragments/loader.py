"""Fragment files on disk — ``implementors/<module path>/trait.<Name>.js``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from impl_index.bridge.models import Fragment
from impl_index.fragments.codec import FragmentParseError, parse_fragment

logger = logging.getLogger(__name__)

FRAGMENT_SUFFIX = ".js"
TRAIT_PREFIX = "trait."


def trait_path_for(path: str | Path, root: str | Path) -> str:
    """``<root>/core/default/trait.Default.js`` -> ``core::default::Default``."""
    rel = Path(path).relative_to(root)
    name = rel.name
    if not name.endswith(FRAGMENT_SUFFIX):
        raise FragmentParseError(f"not a fragment file: {path}")
    name = name[: -len(FRAGMENT_SUFFIX)]
    if name.startswith(TRAIT_PREFIX):
        name = name[len(TRAIT_PREFIX):]
    return "::".join([*rel.parent.parts, name])


def load_fragment(path: str | Path, root: str | Path | None = None) -> Fragment:
    path = Path(path)
    if root is None:
        root = path.parent
    text = path.read_text(encoding="utf-8")
    try:
        contribution = parse_fragment(text)
    except FragmentParseError as exc:
        raise FragmentParseError(f"{path}: {exc}") from exc
    fragment = Fragment(
        trait_path=trait_path_for(path, root),
        source=str(path),
        contribution=contribution,
    )
    logger.debug("Loaded %s (%d groups)", fragment.trait_path, len(contribution))
    return fragment


def iter_fragments(root: str | Path) -> Iterator[Fragment]:
    """Yield every fragment under *root*, sorted by path."""
    root = Path(root)
    for path in sorted(root.rglob(f"*{FRAGMENT_SUFFIX}")):
        yield load_fragment(path, root)
