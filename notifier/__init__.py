from .blocks import add_header, build_payload, version_to_blocks
from .changelog import (
    ChangelogItem,
    ChangelogSection,
    ChangelogVersion,
    LinkRun,
    TextRun,
    latest_version,
    parse_changelog,
)

__all__ = [
    "ChangelogItem",
    "ChangelogSection",
    "ChangelogVersion",
    "LinkRun",
    "TextRun",
    "add_header",
    "build_payload",
    "latest_version",
    "parse_changelog",
    "version_to_blocks",
]
