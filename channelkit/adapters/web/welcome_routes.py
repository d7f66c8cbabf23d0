"""Welcome channel API routes — manual refresh / clear triggers."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from channelkit.domain.welcome import WelcomeChannel, WelcomeRegistry
from channelkit.errors import ChannelKitError

welcome_router = APIRouter(prefix="/welcome", tags=["Welcome"])

registry = WelcomeRegistry()


class ChannelSummary(BaseModel):
    channel_id: int
    name: str
    url: str
    blocks: int
    busy: bool
    refresh_armed: bool


class BlockSummary(BaseModel):
    index: int
    type: str
    title: Optional[str] = None


class RefreshResponse(BaseModel):
    success: bool
    created: int = 0
    edited: int = 0
    deleted: int = 0
    unchanged: int = 0


class ClearResponse(BaseModel):
    success: bool
    deleted: int = 0


def _get_welcome(channel_id: int) -> WelcomeChannel:
    welcome = registry.get(channel_id)
    if welcome is None:
        raise HTTPException(status_code=404, detail=f"Welcome channel {channel_id} not configured")
    return welcome


@welcome_router.get("/channels", response_model=List[ChannelSummary])
async def list_channels():
    return [
        ChannelSummary(
            channel_id=w.channel.id,
            name=w.channel.name,
            url=w.url,
            blocks=len(w.get_blocks()),
            busy=w.busy,
            refresh_armed=bool(w.task and w.task.running),
        )
        for w in registry.all()
    ]


@welcome_router.get("/channels/{channel_id}/blocks", response_model=List[BlockSummary])
async def list_blocks(channel_id: int):
    welcome = _get_welcome(channel_id)
    return [
        BlockSummary(index=i, type=b.type_name, title=getattr(b, "title", None))
        for i, b in enumerate(welcome.get_blocks())
    ]


@welcome_router.post("/channels/{channel_id}/refresh", response_model=RefreshResponse)
async def refresh_channel(channel_id: int):
    welcome = _get_welcome(channel_id)
    try:
        result = await welcome.populate()
    except ChannelKitError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return RefreshResponse(
        success=True,
        created=len(result.created),
        edited=len(result.edited),
        deleted=len(result.deleted),
        unchanged=len(result.unchanged),
    )


@welcome_router.post("/channels/{channel_id}/clear", response_model=ClearResponse)
async def clear_channel(channel_id: int):
    welcome = _get_welcome(channel_id)
    try:
        deleted = await welcome.clear()
    except ChannelKitError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return ClearResponse(success=True, deleted=deleted)
