# parsers that turn a model's numbered-list reply into task names
# NOTE: best-effort text splitting only; any Callable[[str], list[str]] can be swapped in.

from typing import Callable

# raw model text -> candidate task names, in reply order
TaskListParser = Callable[[str], list[str]]

ENUMERATION_DELIMITER = "."

def _split_lines(text: str) -> list[str]:
    return text.strip().split("\n")

def split_on_first_period(text: str) -> list[str]:
    """
    Permissive parser: one entry per line, the name is everything after the first '.', trimmed.
    Lines without a '.' give an empty name instead of being dropped.
    e.g. "1. Write outline\\n2. Draft section one" -> ["Write outline", "Draft section one"]
    """
    names = []
    for line in _split_lines(text):
        _, delimiter, rest = line.partition(ENUMERATION_DELIMITER)
        names.append(rest.strip() if delimiter else "")
    return names

def enumerated_items_only(text: str) -> list[str]:
    """
    Stricter parser: same split, but lines without a '.' are dropped.
    """
    names = []
    for line in _split_lines(text):
        _, delimiter, rest = line.strip().partition(ENUMERATION_DELIMITER)
        if delimiter:
            names.append(rest.strip())
    return names
