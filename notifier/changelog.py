from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .errors import EmptyVersionList, MalformedDocument, MissingInputFile


BRACKETED_HEADER_PREFIXES = ("# [", "## [")
BRACKETED_VERSION_RE = re.compile(r"# \[(.*?)\]")
# Unescaped dots: "# 1-2-3" also counts as a header.
BARE_HEADER_RE = re.compile(r"^# \d+.\d+.\d+")
DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
HEADER_URL_RE = re.compile(r"\((.*?)\)")
LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")
LINE_BREAK_RE = re.compile(r"\r?\n")

SECTION_PREFIX = "### "
ITEM_PREFIX = "* "
BOLD_MARKER = "**"

HTML_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"))


@dataclass(frozen=True)
class TextRun:
    text: str


@dataclass(frozen=True)
class LinkRun:
    url: str
    text: str


Run = Union[TextRun, LinkRun]


@dataclass
class ChangelogItem:
    raw_text: str
    runs: List[Run]

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass
class ChangelogSection:
    title: str
    items: List[ChangelogItem] = field(default_factory=list)


@dataclass
class ChangelogVersion:
    version: str
    date: str
    url: Optional[str] = None
    sections: List[ChangelogSection] = field(default_factory=list)


Element = Union[ChangelogVersion, ChangelogSection, ChangelogItem]


@dataclass
class _ParseState:
    versions: List[ChangelogVersion] = field(default_factory=list)


def read_changelog(path: Union[str, Path]) -> str:
    path = Path(path)
    if not path.is_file():
        raise MissingInputFile(f"Changelog file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MissingInputFile(f"Could not decode changelog file {path} as UTF-8: {e}") from e
    except OSError as e:
        raise MissingInputFile(f"Could not read changelog file {path}: {e}") from e
    logging.info(f"Read changelog from {path} ({len(text)} chars)")
    return text


def normalize_item(line: str) -> str:
    """Strip bold markers and bullets, then HTML-escape the line.

    Every "* " is removed, not just the leading bullet, so a literal
    "* " inside link text disappears as well.
    """
    text = line.replace(BOLD_MARKER, "").replace(ITEM_PREFIX, "")
    for char, entity in HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def parse_item(line: str) -> ChangelogItem:
    text = normalize_item(line)
    runs: List[Run] = []
    position = 0
    for m in LINK_RE.finditer(text):
        runs.append(TextRun(text[position:m.start()]))
        runs.append(LinkRun(url=m.group(2), text=m.group(1)))
        position = m.end()
    runs.append(TextRun(text[position:]))
    return ChangelogItem(raw_text=text, runs=runs)


def _parse_date(line: str, line_no: int) -> str:
    m = DATE_RE.search(line)
    if not m:
        raise MalformedDocument(f"Line {line_no}: version header has no YYYY-MM-DD date: {line!r}")
    return m.group(0)


def _parse_header(line: str, line_no: int) -> Optional[ChangelogVersion]:
    if line.startswith(BRACKETED_HEADER_PREFIXES):
        version_match = BRACKETED_VERSION_RE.search(line)
        if not version_match:
            raise MalformedDocument(f"Line {line_no}: unterminated version in header: {line!r}")
        url_match = HEADER_URL_RE.search(line)
        return ChangelogVersion(
            version=version_match.group(1),
            date=_parse_date(line, line_no),
            url=url_match.group(1) if url_match else None,
        )
    if BARE_HEADER_RE.match(line):
        version = line[2:].split(" ", 1)[0]
        return ChangelogVersion(version=version, date=_parse_date(line, line_no))
    return None


def _classify(lines: List[str]) -> Iterator[Tuple[int, Element]]:
    for line_no, line in enumerate(lines, start=1):
        header = _parse_header(line, line_no)
        if header is not None:
            yield line_no, header
        elif line.startswith(SECTION_PREFIX):
            yield line_no, ChangelogSection(title=line[len(SECTION_PREFIX):])
        elif line.startswith(ITEM_PREFIX):
            yield line_no, parse_item(line)


def _fold(state: _ParseState, element: Tuple[int, Element]) -> _ParseState:
    line_no, node = element
    if isinstance(node, ChangelogVersion):
        state.versions.append(node)
        return state

    if not state.versions:
        raise MalformedDocument(f"Line {line_no}: content appears before any version header")
    current = state.versions[-1]

    if isinstance(node, ChangelogSection):
        current.sections.append(node)
        return state

    if not current.sections:
        raise MalformedDocument(
            f"Line {line_no}: list item appears before any section in version {current.version}"
        )
    current.sections[-1].items.append(node)
    return state


def parse_changelog(markdown: str) -> List[ChangelogVersion]:
    state = reduce(_fold, _classify(LINE_BREAK_RE.split(markdown)), _ParseState())
    logging.debug(f"Parsed {len(state.versions)} versions: {[v.version for v in state.versions]}")
    return state.versions


def latest_version(versions: List[ChangelogVersion]) -> ChangelogVersion:
    # Changelogs are written newest-first.
    if not versions:
        raise EmptyVersionList("Changelog contains no version headers")
    return versions[0]
