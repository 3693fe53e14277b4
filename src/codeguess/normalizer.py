"""Best-effort comment stripping and effective line counting.

These are regex heuristics, not tokenizers: a comment marker inside a string
literal can be mistaken for a real comment. The output only feeds a length
check and the last-resort display copy of a round, so that imprecision is
accepted.
"""

import re

_C_FAMILY = frozenset(
    {
        "JavaScript",
        "JavaScript (React)",
        "TypeScript",
        "TypeScript (React)",
        "Java",
        "Go",
        "C",
        "C++",
        "C#",
        "PHP",
        "Rust",
        "Swift",
        "Kotlin",
    }
)
_HASH_FAMILY = frozenset({"Python", "Ruby"})

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
# "://" is left alone so URLs survive
_LINE_COMMENT = re.compile(r"(?<!:)//.*")
_TRIPLE_QUOTED = re.compile(r'"""[\s\S]*?"""|\'\'\'[\s\S]*?\'\'\'')
_HASH_COMMENT = re.compile(r"#.*")
_BLANK_RUN = re.compile(r"\n{3,}")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\n)+")
_TRAILING_SPACE = re.compile(r"[ \t]+$", re.MULTILINE)
_MAX_PASSES = 8


def _strip_c_family(code: str) -> str:
    return _LINE_COMMENT.sub("", _BLOCK_COMMENT.sub("", code))


def _strip_hash_family(code: str) -> str:
    return _HASH_COMMENT.sub("", _TRIPLE_QUOTED.sub("", code))


def _collapse(code: str) -> str:
    code = _TRAILING_SPACE.sub("", code)
    code = _BLANK_RUN.sub("\n\n", code)
    return _LEADING_BLANK_LINES.sub("", code)


def _strip_once(code: str, language: str) -> str:
    if language in _C_FAMILY:
        stripped = _strip_c_family(code)
    elif language in _HASH_FAMILY:
        stripped = _strip_hash_family(code)
    else:
        stripped = _strip_hash_family(_strip_c_family(code))
    return _collapse(stripped)


def strip_comments(code: str, language: str) -> str:
    """Strip comments until nothing changes.

    Removing one comment can splice its neighbours into a new one (stray quotes
    into a triple-quoted string, two slashes into ``//``), so a single pass is
    not always a fixed point. Every pass only deletes text, so it settles fast.
    """
    code = code.replace("\r\n", "\n")
    for _ in range(_MAX_PASSES):
        stripped = _strip_once(code, language)
        if stripped == code:
            break
        code = stripped
    return code


def count_code_lines(code: str) -> int:
    return sum(1 for line in code.splitlines() if line.strip())
