"""Inbound port — platform-agnostic message representation."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from channelkit.domain.models import Embed


@dataclass
class GuildInfo:
    id: int
    name: str = ""


@dataclass
class ChannelMessage:
    """Discord/Slack-agnostic snapshot of a live channel message."""

    id: int
    created_at: datetime
    author_id: Optional[int]
    is_default: bool
    content: str = ""
    embeds: List[Embed] = field(default_factory=list)
    has_components: bool = False
