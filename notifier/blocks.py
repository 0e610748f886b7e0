from __future__ import annotations

from typing import Any, Dict, List

from .changelog import ChangelogItem, ChangelogSection, ChangelogVersion, LinkRun, Run


Block = Dict[str, Any]

HEADER_TEMPLATE = "Release Note - {name}"


def format_version_line(version: ChangelogVersion) -> str:
    if version.url:
        return f"<{version.url}|{version.version}> ({version.date})"
    return f"{version.version} ({version.date})"


def _run_element(run: Run) -> Dict[str, Any]:
    if isinstance(run, LinkRun):
        return {"type": "link", "url": run.url, "text": run.text}
    return {"type": "text", "text": run.text}


def _item_element(item: ChangelogItem) -> Dict[str, Any]:
    return {
        "type": "rich_text_section",
        "elements": [_run_element(run) for run in item.runs],
    }


def _section_block(section: ChangelogSection) -> Block:
    return {
        "type": "rich_text",
        "elements": [
            {
                "type": "rich_text_section",
                "elements": [
                    {"type": "text", "text": f"{section.title}\n", "style": {"bold": True}},
                ],
            },
            {
                "type": "rich_text_list",
                "style": "bullet",
                "elements": [_item_element(item) for item in section.items],
            },
        ],
    }


def version_to_blocks(version: ChangelogVersion) -> List[Block]:
    """Render one version as a summary block followed by one rich text block per section."""
    blocks: List[Block] = [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": format_version_line(version)},
        }
    ]
    blocks.extend(_section_block(section) for section in version.sections)
    return blocks


def add_header(blocks: List[Block], display_name: str) -> List[Block]:
    header = {
        "type": "header",
        "text": {"type": "plain_text", "text": HEADER_TEMPLATE.format(name=display_name)},
    }
    return [header, *blocks]


def build_payload(blocks: List[Block]) -> Dict[str, Any]:
    return {"blocks": blocks}
