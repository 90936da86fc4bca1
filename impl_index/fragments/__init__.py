from impl_index.fragments.codec import FragmentParseError, parse_fragment, render_fragment
from impl_index.fragments.loader import iter_fragments, load_fragment, trait_path_for

__all__ = [
    "FragmentParseError",
    "iter_fragments",
    "load_fragment",
    "parse_fragment",
    "render_fragment",
    "trait_path_for",
]
