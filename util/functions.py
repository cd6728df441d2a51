import re
from util.constants import DATA_URL_PREFIX

_NEWLINES = re.compile(r"[\r\n]+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def clean_title(title: str | None) -> str:
    """
    - Collapse CR/LF runs to a single space (photos.txt is line-oriented).
    - Trim surrounding whitespace.
    """
    return _NEWLINES.sub(" ", title or "").strip()


def clean_extension(ext: str | None) -> str:
    return _NON_ALNUM.sub("", (ext or "").lower())


def strip_data_url(content: str) -> str:
    return DATA_URL_PREFIX.sub("", content, count=1)


def zero_pad(number: int, width: int = 3) -> str:
    return str(number).rjust(width, "0")
