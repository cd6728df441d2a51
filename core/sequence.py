from typing import Iterable, Optional
from util.constants import FILENAME_PATTERN, INDEX_NUMBER_PATTERN, INDEX_SEPARATOR


def parse_photo_number(name: str) -> Optional[int]:
    """
    Numeric prefix of a stored photo name ("007.jpg" -> 7), or None when the
    name is not a fixed-width photo filename.
    """
    m = FILENAME_PATTERN.match(name)
    return int(m.group(1)) if m else None


def parse_index_number(line: str) -> Optional[int]:
    """Numeric prefix of the filename segment of one photos.txt line."""
    filename = line.split(INDEX_SEPARATOR, 1)[0].strip()
    m = INDEX_NUMBER_PATTERN.match(filename)
    return int(m.group(1)) if m else None


def derive_next_from_listing(names: Iterable[str]) -> int:
    numbers = (parse_photo_number(n) for n in names)
    return max((n for n in numbers if n is not None), default=0) + 1


def derive_next_from_index(text: Optional[str]) -> int:
    """
    - None (index not created yet) and "" both mean no entries -> 1.
    - Blank and unparseable lines are ignored.
    """
    if not text:
        return 1
    numbers = (parse_index_number(line) for line in text.splitlines() if line.strip())
    return max((n for n in numbers if n is not None), default=0) + 1


def append_line(text: str, line: str) -> str:
    """Append `line` to index text, repairing a missing trailing newline first."""
    if text and not text.endswith("\n"):
        text += "\n"
    return text + line
