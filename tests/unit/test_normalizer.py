import pytest

from codeguess.normalizer import count_code_lines, strip_comments

C_SAMPLE = """\
/*
 * License header
 */
#include <stdio.h>

// entry point
int main(void) {
    int x = 1; /* inline */
    return x; // trailing
}
"""

PY_SAMPLE = '''\
"""Module docstring."""

import os


def f(x):
    """Docstring
    spanning lines."""
    # comment
    return x  # trailing
'''

RUBY_SAMPLE = """\
# frozen_string_literal: true
class Greeter
  def hi
    puts 'hi' # say it
  end
end
"""


def test_c_family_removes_block_and_line_comments() -> None:
    cleaned = strip_comments(C_SAMPLE, "C")
    assert "License" not in cleaned
    assert "entry point" not in cleaned
    assert "inline" not in cleaned
    assert "trailing" not in cleaned
    assert "#include <stdio.h>" in cleaned
    assert cleaned.startswith("#include")


def test_c_family_keeps_urls() -> None:
    cleaned = strip_comments('const u = "https://example.com/x";\n', "JavaScript")
    assert "https://example.com/x" in cleaned


def test_python_removes_docstrings_and_hash_comments() -> None:
    cleaned = strip_comments(PY_SAMPLE, "Python")
    assert "docstring" not in cleaned.lower()
    assert "comment" not in cleaned
    assert "trailing" not in cleaned
    assert "import os" in cleaned
    assert "return x" in cleaned
    assert cleaned.startswith("import os")


def test_ruby_removes_hash_comments() -> None:
    cleaned = strip_comments(RUBY_SAMPLE, "Ruby")
    assert "frozen_string_literal" not in cleaned
    assert "say it" not in cleaned
    assert "puts 'hi'" in cleaned


def test_unknown_language_applies_both_rule_sets() -> None:
    code = "# hash\n// slash\n/* block */\nvalue\n"
    assert strip_comments(code, "Unknown") == "value\n"


def test_blank_runs_collapse_to_one_empty_line() -> None:
    cleaned = strip_comments("\n\n\na\n\n\n\n\nb\n", "Go")
    assert cleaned == "a\n\nb\n"


@pytest.mark.parametrize(
    ("code", "language"),
    [
        (C_SAMPLE, "C"),
        (C_SAMPLE, "Unknown"),
        (PY_SAMPLE, "Python"),
        (PY_SAMPLE, "Unknown"),
        (RUBY_SAMPLE, "Ruby"),
        ("fn main() {\n    // hi\n    println!(\"x\");\n}\n", "Rust"),
        ("x = \"\"'''a'''\"y\"\"\"\nz = 1\n", "Python"),
        ("a = 1 /'''x'''/ y\nb = 2\n", "Unknown"),
    ],
)
def test_stripping_is_idempotent(code: str, language: str) -> None:
    once = strip_comments(code, language)
    assert strip_comments(once, language) == once


def test_count_code_lines_ignores_blank_lines() -> None:
    assert count_code_lines("a\n\n\nb\n") == 2
    assert count_code_lines("   \n\t\n") == 0
    assert count_code_lines("") == 0
    assert count_code_lines("one") == 1


def test_comment_spliced_by_removal_is_stripped_too() -> None:
    assert strip_comments("a = 1 /'''x'''/ y\nb = 2\n", "Unknown") == "a = 1\nb = 2\n"
    assert strip_comments("x = \"\"'''a'''\"y\"\"\"\nz = 1\n", "Python") == "x =\nz = 1\n"
