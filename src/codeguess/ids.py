"""Identifier helpers."""

import secrets
import string
from uuid import uuid4

_JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


def new_join_code(length: int = 6) -> str:
    """Short shareable code the second player types to join a game."""
    return "".join(secrets.choice(_JOIN_CODE_ALPHABET) for _ in range(length))
