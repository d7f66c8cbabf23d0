"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

DISCORD_BLURPLE = 0x5865F2
DISCORD_RED = 0xED4245


class RenderMode(Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass
class EmbedField:
    name: str
    value: str
    inline: bool = False


@dataclass
class Embed:
    """Platform-agnostic embed payload."""

    title: Optional[str] = None
    description: Optional[str] = None
    color: Optional[int] = None
    fields: List[EmbedField] = field(default_factory=list)
    image: Optional[str] = None
    thumbnail: Optional[str] = None
    footer: Optional[str] = None


@dataclass
class RenderedMessage:
    """What a block wants a channel message to look like.

    ``clear_components`` is set for edits so buttons/selects left over
    from a previous block are removed.
    """

    content: Optional[str] = None
    embed: Optional[Embed] = None
    clear_components: bool = False
