"""File-extension to language mapping for sampled source files."""

from pathlib import PurePosixPath

UNKNOWN_LANGUAGE = "Unknown"

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    "js": "JavaScript",
    "jsx": "JavaScript (React)",
    "ts": "TypeScript",
    "tsx": "TypeScript (React)",
    "py": "Python",
    "rb": "Ruby",
    "java": "Java",
    "go": "Go",
    "c": "C",
    "cpp": "C++",
    "cs": "C#",
    "php": "PHP",
    "rs": "Rust",
}

# Conventional source directory names preferred when walking a repository root.
SOURCE_DIR_NAMES = frozenset(
    {"src", "lib", "core", "main", "utils", "helpers", "components", "packages"}
)


def _extension(path: str) -> str:
    suffix = PurePosixPath(path).suffix
    return suffix[1:].lower() if suffix else ""


def language_from_path(path: str) -> str:
    return LANGUAGE_BY_EXTENSION.get(_extension(path), UNKNOWN_LANGUAGE)


def is_code_file(name: str) -> bool:
    return _extension(name) in LANGUAGE_BY_EXTENSION
