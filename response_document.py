"""
Structured view of an assistant reply and the text normalization applied to it.

The page is read through a DocumentAdapter, which turns whatever markup the
chat surface renders into an ordered list of Blocks and citation URLs.
``format_blocks`` then builds the plain-text reply from those blocks alone,
so the formatting rules run without a browser.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Optional, Protocol

import chat_selectors
from errors import EMPTY_RESPONSE_TEXT

HEADING = "heading"
LIST_ITEM = "list_item"
CODE = "code"
TEXT = "text"

BULLET = "•"


@dataclass(frozen=True)
class Block:
    kind: str
    text: str
    # A TEXT block whose immediate parent is a paragraph, heading or list item.
    nested: bool = False


class DocumentAdapter(Protocol):
    def found(self) -> bool: ...

    def list_blocks(self) -> List[Block]: ...

    def list_citations(self) -> List[str]: ...

    def flattened_text(self) -> str: ...


def format_block(block: Block) -> str:
    content = block.text.strip()
    if not content:
        return ""
    if block.kind == HEADING:
        return "\n\n" + content + "\n" + "=" * len(content) + "\n"
    if block.kind == LIST_ITEM:
        return f"\n{BULLET} " + content
    if block.kind == CODE:
        return "\n```\n" + content + "\n```\n"
    if block.nested:
        return ""
    return "\n" + content


def format_blocks(blocks: List[Block], fallback_text: str = "") -> str:
    """Join blocks in document order; with no blocks at all, use ``fallback_text``."""
    if not blocks:
        return (fallback_text or "").strip()
    return "".join(format_block(b) for b in blocks).strip()


def normalize_response(adapter: DocumentAdapter) -> dict:
    """Build ``{"text", "links"}``; empty text becomes the sentinel with no links."""
    text = format_blocks(adapter.list_blocks(), adapter.flattened_text())
    if not text.strip():
        return {"text": EMPTY_RESPONSE_TEXT, "links": []}
    return {"text": text, "links": list(adapter.list_citations())}


# Reads the last conversation turn in a single evaluation. Heading tags map to
# "heading", li to "list_item", pre/code to "code", everything else to "text".
SNAPSHOT_SCRIPT_TEMPLATE = """
() => {
  const turns = Array.from(document.querySelectorAll(%(turn)s));
  const turn = turns[turns.length - 1];
  if (!turn) return { found: false, blocks: [], citations: [], fallback: '' };

  const citations = [];
  turn.querySelectorAll(%(citation)s).forEach((pill) => {
    const a = pill.querySelector('a');
    if (a && a.href) citations.push(a.href);
  });

  const parentTags = %(parent_tags)s;
  const blocks = Array.from(turn.querySelectorAll(%(text_elements)s)).map((el) => {
    const tag = el.tagName.toLowerCase();
    let kind = 'text';
    if (/^h[1-6]$/.test(tag)) kind = 'heading';
    else if (tag === 'li') kind = 'list_item';
    else if (tag === 'pre' || tag === 'code') kind = 'code';
    const parent = el.parentElement;
    const nested = kind === 'text' && !!parent && parentTags.includes(parent.tagName.toLowerCase());
    return { kind, text: (el.textContent || '').trim(), nested };
  });

  return { found: true, blocks, citations, fallback: (turn.textContent || '').trim() };
}
"""


def snapshot_script() -> str:
    return SNAPSHOT_SCRIPT_TEMPLATE % {
        "turn": json.dumps(chat_selectors.CONVERSATION_TURN),
        "citation": json.dumps(chat_selectors.CITATION_PILL),
        "parent_tags": json.dumps(list(chat_selectors.BLOCK_PARENT_TAGS)),
        "text_elements": json.dumps(chat_selectors.TEXT_ELEMENTS),
    }


class DomDocumentAdapter:
    """DocumentAdapter over the last ``conversation-turn`` article of a live page."""

    def __init__(self, snapshot: Optional[dict]):
        self._snapshot = snapshot if isinstance(snapshot, dict) else {}

    @classmethod
    def from_page(cls, page) -> "DomDocumentAdapter":
        return cls(page.evaluate(snapshot_script()))

    def found(self) -> bool:
        return bool(self._snapshot.get("found"))

    def list_blocks(self) -> List[Block]:
        blocks = []
        for raw in self._snapshot.get("blocks") or []:
            if not isinstance(raw, dict):
                continue
            blocks.append(
                Block(
                    kind=str(raw.get("kind") or TEXT),
                    text=str(raw.get("text") or ""),
                    nested=bool(raw.get("nested")),
                )
            )
        return blocks

    def list_citations(self) -> List[str]:
        return [str(u) for u in self._snapshot.get("citations") or [] if u]

    def flattened_text(self) -> str:
        return str(self._snapshot.get("fallback") or "")
