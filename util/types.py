from typing import TypedDict


# Flow: Narrow types for GitHub contents API bodies.
class ContentsEntry(TypedDict, total=False):
    name: str
    path: str
    sha: str
    type: str


class ContentsFile(ContentsEntry, total=False):
    content: str
    encoding: str


class PutContentsBody(TypedDict, total=False):
    message: str
    content: str
    branch: str
    sha: str
