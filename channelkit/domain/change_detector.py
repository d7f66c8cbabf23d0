"""Change detection — decides whether a live message already shows a block.

Comparison only avoids redundant edits; answering True too often costs an
API call, never correctness.
"""

from typing import Optional

from channelkit.domain.blocks import Block
from channelkit.domain.models import Embed, RenderedMessage, RenderMode
from channelkit.ports.inbound import ChannelMessage


def _norm(text: Optional[str]) -> str:
    # Discord trims trailing whitespace from content and embed text.
    return (text or "").rstrip()


def embeds_equal(existing: Embed, wanted: Embed) -> bool:
    if _norm(existing.title) != _norm(wanted.title):
        return False
    if _norm(existing.description) != _norm(wanted.description):
        return False
    if existing.color != wanted.color:
        return False
    if (existing.image or None) != (wanted.image or None):
        return False
    if (existing.thumbnail or None) != (wanted.thumbnail or None):
        return False
    if _norm(existing.footer) != _norm(wanted.footer):
        return False
    if len(existing.fields) != len(wanted.fields):
        return False
    for have, want in zip(existing.fields, wanted.fields):
        if (_norm(have.name), _norm(have.value), have.inline) != (
            _norm(want.name),
            _norm(want.value),
            want.inline,
        ):
            return False
    return True


def is_similar(rendered: RenderedMessage, message: ChannelMessage) -> bool:
    """True when ``message`` already displays ``rendered``."""
    if _norm(rendered.content) != _norm(message.content):
        return False
    wanted = [rendered.embed] if rendered.embed is not None else []
    if len(wanted) != len(message.embeds):
        return False
    return all(embeds_equal(have, want) for have, want in zip(message.embeds, wanted))


def needs_update(message: ChannelMessage, block: Block) -> bool:
    """True when ``message`` must be edited to show ``block``."""
    if message.has_components:
        return True
    return not is_similar(block.render(RenderMode.CREATE), message)
