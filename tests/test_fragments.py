"""Tests for the fragment codec and loader."""

from __future__ import annotations

import pytest

from impl_index.fragments.codec import FragmentParseError, parse_fragment, render_fragment
from impl_index.fragments.loader import iter_fragments, load_fragment, trait_path_for

MT32 = (
    "impl <a class='trait' href='https://doc.rust-lang.org/nightly/core/default/trait.Default.html'"
    " title='core::default::Default'>Default</a> for <a class='struct'"
    " href='rand_mersenne_twister/mt32/struct.MTRng32.html'"
    " title='rand_mersenne_twister::mt32::MTRng32'>MTRng32</a>"
)


class TestParseFragment:
    def test_generated_fragment(self, fixture_root):
        text = (fixture_root / "core" / "default" / "trait.Default.js").read_text()
        contribution = parse_fragment(text)

        assert list(contribution) == ["libc", "rand", "rand_mersenne_twister"]
        assert contribution["libc"] == []
        assert len(contribution["rand"]) == 1
        assert contribution["rand_mersenne_twister"][0] == MT32
        assert contribution["rand_mersenne_twister"][1].endswith(">MTRng64</a>")

    def test_repeated_key_keeps_first_position_last_value(self):
        text = (
            "(function() {var implementors = {};\n"
            "implementors['a'] = [\"one\",];implementors['b'] = [];"
            "implementors['a'] = [\"two\",\"three\",];\n})()"
        )
        contribution = parse_fragment(text)

        assert list(contribution) == ["a", "b"]
        assert contribution["a"] == ["two", "three"]

    def test_escapes_are_decoded(self):
        text = (
            "var implementors = {};"
            r"implementors['k'] = [" r'"say \"hi\"\n", "tab\tx", "é\x41", "it\'s"];'
        )
        assert parse_fragment(text)["k"] == ['say "hi"\n', "tab\tx", "éA", "it's"]

    def test_surrogate_pair_escape(self):
        text = r'var implementors = {};implementors["k"] = ["\ud83e\udd80"];'
        assert parse_fragment(text)["k"] == ["\U0001f980"]

    def test_line_continuation_decodes_to_nothing(self):
        text = 'var implementors = {};implementors[\'k\'] = ["a\\\nb", "c\\\r\nd"];'
        assert parse_fragment(text)["k"] == ["ab", "cd"]

    def test_double_quoted_key_with_apostrophe(self):
        text = 'var implementors = {};implementors["it\'s"] = ["x"];'
        assert parse_fragment(text) == {"it's": ["x"]}

    def test_no_assignments(self):
        assert parse_fragment("(function() {var implementors = {};\n})()") == {}

    def test_missing_prelude(self):
        with pytest.raises(FragmentParseError, match="prelude"):
            parse_fragment("implementors['a'] = [];")

    def test_unterminated_list(self):
        with pytest.raises(FragmentParseError, match="expected"):
            parse_fragment('var implementors = {};implementors[\'a\'] = ["x" "y"];')

    def test_malformed_assignment(self):
        with pytest.raises(FragmentParseError, match="malformed"):
            parse_fragment("var implementors = {};implementors['a'] = 5;")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_fragment("")


class TestRenderFragment:
    def test_matches_generator_output(self, fixture_root):
        text = (fixture_root / "core" / "clone" / "trait.Clone.js").read_text()
        assert render_fragment(parse_fragment(text)) == text

    def test_awkward_strings_survive(self):
        contribution = {"it's": ['quote " and \\ backslash', "line\nbreak", ""], "empty": []}
        assert parse_fragment(render_fragment(contribution)) == contribution

    def test_key_with_double_quote_survives(self):
        contribution = {'a"b': ["x"], "c'd\"e": []}
        assert parse_fragment(render_fragment(contribution)) == contribution


class TestLoader:
    def test_trait_path(self, fixture_root):
        path = fixture_root / "core" / "default" / "trait.Default.js"
        assert trait_path_for(path, fixture_root) == "core::default::Default"

    def test_trait_path_rejects_other_files(self, fixture_root):
        with pytest.raises(FragmentParseError):
            trait_path_for(fixture_root / "core" / "README.md", fixture_root)

    def test_load_fragment(self, fixture_root):
        fragment = load_fragment(fixture_root / "core" / "clone" / "trait.Clone.js", fixture_root)

        assert fragment.trait_path == "core::clone::Clone"
        assert fragment.item_count == 2
        assert fragment.source.endswith("trait.Clone.js")

    def test_load_fragment_reports_path(self, tmp_path):
        bad = tmp_path / "trait.Bad.js"
        bad.write_text("not a fragment")
        with pytest.raises(FragmentParseError, match="trait.Bad.js"):
            load_fragment(bad)

    def test_iter_fragments_sorted(self, fixture_root):
        traits = [f.trait_path for f in iter_fragments(fixture_root)]
        assert traits == ["core::clone::Clone", "core::default::Default"]
