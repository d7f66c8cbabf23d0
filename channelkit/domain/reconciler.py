"""Message reconciler — aligns a channel's bot messages with a block list.

Alignment is positional: the i-th bot message (oldest first) shows the
i-th block. Reordering blocks in the document therefore edits messages in
place instead of moving them.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from channelkit.domain.blocks import Block
from channelkit.domain.change_detector import needs_update
from channelkit.domain.models import RenderMode
from channelkit.errors import NotFoundIgnorable, PlatformApiError
from channelkit.ports.inbound import ChannelMessage
from channelkit.ports.outbound import ChannelPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class ActionKind(Enum):
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    KEEP = "keep"


@dataclass
class Action:
    kind: ActionKind
    index: int
    block: Optional[Block] = None
    message_id: Optional[int] = None


@dataclass
class ReconcileResult:
    created: List[int] = field(default_factory=list)
    edited: List[int] = field(default_factory=list)
    deleted: List[int] = field(default_factory=list)
    unchanged: List[int] = field(default_factory=list)

    @property
    def writes(self) -> int:
        return len(self.created) + len(self.edited) + len(self.deleted)

    def summary(self) -> str:
        return (
            f"{len(self.created)} created, {len(self.edited)} edited, "
            f"{len(self.deleted)} deleted, {len(self.unchanged)} unchanged"
        )


def own_messages(messages: List[ChannelMessage], self_id: Optional[int]) -> List[ChannelMessage]:
    """Bot-authored default messages, oldest first."""
    owned = [m for m in messages if m.is_default and m.author_id is not None and m.author_id == self_id]
    return sorted(owned, key=lambda m: (m.created_at, m.id))


def plan_actions(messages: List[ChannelMessage], blocks: List[Block]) -> List[Action]:
    """Compute per-index actions for already-filtered, sorted ``messages``."""
    actions: List[Action] = []

    def _pair(index: int, message: ChannelMessage, block: Block):
        kind = ActionKind.EDIT if needs_update(message, block) else ActionKind.KEEP
        actions.append(Action(kind, index, block=block, message_id=message.id))

    if len(messages) > len(blocks):
        for index, message in enumerate(messages):
            if index < len(blocks):
                _pair(index, message, blocks[index])
            else:
                actions.append(Action(ActionKind.DELETE, index, message_id=message.id))
    else:
        for index, block in enumerate(blocks):
            if index < len(messages):
                _pair(index, messages[index], block)
            else:
                actions.append(Action(ActionKind.CREATE, index, block=block))

    return actions


class MessageReconciler:
    """Applies planned actions to a channel and keeps the message mapping."""

    def __init__(self, channel: ChannelPort):
        self._channel = channel

    def plan(self, messages: List[ChannelMessage], blocks: List[Block]) -> List[Action]:
        return plan_actions(own_messages(messages, self._channel.self_id), blocks)

    async def apply(self, actions: List[Action], mapping: Dict[int, Block]) -> ReconcileResult:
        """Run ``actions`` in order. Already-applied actions are not rolled back on failure."""
        result = ReconcileResult()
        for action in actions:
            try:
                await self._apply_one(action, mapping, result)
            except PlatformApiError:
                raise
            except Exception as e:
                raise PlatformApiError(
                    f"Failed to {action.kind.value} message at position {action.index}", cause=e
                ) from e
        return result

    async def _apply_one(self, action: Action, mapping: Dict[int, Block], result: ReconcileResult):
        if action.kind is ActionKind.KEEP:
            mapping[action.message_id] = action.block
            result.unchanged.append(action.message_id)

        elif action.kind is ActionKind.EDIT:
            await self._channel.edit_message(action.message_id, action.block.render(RenderMode.EDIT))
            mapping[action.message_id] = action.block
            result.edited.append(action.message_id)

        elif action.kind is ActionKind.CREATE:
            message_id = await self._channel.create_message(action.block.render(RenderMode.CREATE))
            mapping[message_id] = action.block
            result.created.append(message_id)

        elif action.kind is ActionKind.DELETE:
            try:
                await self._channel.delete_message(action.message_id)
            except NotFoundIgnorable:
                _log(f"[reconciler] message {action.message_id} already deleted")
            mapping.pop(action.message_id, None)
            result.deleted.append(action.message_id)

    async def reconcile(
        self,
        messages: List[ChannelMessage],
        blocks: List[Block],
        mapping: Dict[int, Block],
    ) -> ReconcileResult:
        return await self.apply(self.plan(messages, blocks), mapping)
