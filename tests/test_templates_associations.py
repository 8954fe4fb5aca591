"""Tests for template association matching."""

from pathlib import Path

import pytest

from devinit_client.templates import match_template

ASSOCIATIONS = {
    "*.py": "python",
    "Makefile": "make",
    "docs/*.md": "doc-page",
    "*.md": "markdown",
}


class TestMatchTemplate:
    """Test match_template."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("main.py", "python"),
            ("src/pkg/module.py", "python"),
            ("Makefile", "make"),
            ("build/Makefile", "make"),
            ("docs/index.md", "doc-page"),
            ("project/docs/index.md", "doc-page"),
            ("README.md", "markdown"),
            ("notes.txt", None),
            ("Makefile.bak", None),
        ],
    )
    def test_matches(self, path, expected):
        """Patterns match at any depth, like **/<pattern>."""
        assert match_template(path, ASSOCIATIONS) == expected

    def test_first_match_wins(self):
        """Earlier associations take priority."""
        associations = {"*.md": "markdown", "docs/*.md": "doc-page"}
        assert match_template("docs/index.md", associations) == "markdown"

    def test_explicit_globstar_prefix(self):
        """A leading **/ is accepted."""
        assert match_template("a/b/c.rs", {"**/*.rs": "rust"}) == "rust"

    def test_accepts_path_objects(self):
        """Path objects work as well as strings."""
        assert match_template(Path("src") / "app.py", ASSOCIATIONS) == "python"

    def test_case_sensitive(self):
        """Matching is case-sensitive on every platform."""
        assert match_template("makefile", {"Makefile": "make"}) is None

    def test_no_associations(self):
        """Nothing matches an empty association map."""
        assert match_template("main.py", {}) is None
