"""Welcome channel blocks — declarative content units, one per channel message.

Blocks are pydantic models so that required fields are validated when the
document is decoded, before any channel message is touched.
"""

from abc import abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from channelkit.domain.models import (
    DISCORD_BLURPLE,
    Embed,
    EmbedField,
    RenderedMessage,
    RenderMode,
)


def parse_color(value: Any) -> Any:
    """Accept ``#RRGGBB`` / ``0xRRGGBB`` strings as well as ints."""
    if isinstance(value, str):
        raw = value.strip().lower()
        if raw.startswith("#"):
            raw = raw[1:]
        elif raw.startswith("0x"):
            raw = raw[2:]
        try:
            return int(raw, 16)
        except ValueError:
            raise ValueError(f"Invalid color: {value!r}")
    return value


class Block(BaseModel):
    """Base class for all block variants.

    Subclasses set ``type_name`` (the document tag) and implement
    ``build()``. ``channel`` and ``guild`` are injected after fetch.
    """

    model_config = ConfigDict(extra="forbid")

    type_name: ClassVar[str] = ""

    _channel: Any = PrivateAttr(default=None)
    _guild: Any = PrivateAttr(default=None)

    @property
    def channel(self):
        return self._channel

    @property
    def guild(self):
        return self._guild

    def attach(self, channel, guild) -> None:
        """Inject the owning channel and guild."""
        self._channel = channel
        self._guild = guild

    def render(self, mode: RenderMode = RenderMode.CREATE) -> RenderedMessage:
        rendered = self.build()
        rendered.clear_components = mode is RenderMode.EDIT
        return rendered

    @abstractmethod
    def build(self) -> RenderedMessage: ...

    async def handle_interaction(self, event) -> None:
        """Interactive blocks override this; plain blocks ignore interactions."""
        return None


class LinksBlock(Block):
    """An embed listing links, one line per entry rendered from ``template``."""

    type_name: ClassVar[str] = "links"

    title: str
    links: Dict[str, str]
    text: Optional[str] = None
    color: int = DISCORD_BLURPLE
    description: Optional[str] = None
    template: str = "**»** [{TEXT}]({URL})"

    @field_validator("color", mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> Any:
        return parse_color(value)

    @field_validator("links")
    @classmethod
    def _require_links(cls, value: Dict[str, str]) -> Dict[str, str]:
        if not value:
            raise ValueError("Must provide at least one link")
        return value

    def build_description(self) -> str:
        parts: List[str] = []
        if self.description is not None:
            parts.append(self.description)
            parts.append("\n\n")
        for text, url in self.links.items():
            parts.append(self.template.replace("{TEXT}", text).replace("{URL}", url))
            parts.append("\n")
        return "".join(parts)

    def build(self) -> RenderedMessage:
        return RenderedMessage(
            content=self.text,
            embed=Embed(
                title=self.title,
                description=self.build_description(),
                color=self.color,
            ),
        )


class TextBlock(Block):
    """Plain message text, no embed."""

    type_name: ClassVar[str] = "text"

    text: str

    @field_validator("text")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Text must not be empty")
        return value

    def build(self) -> RenderedMessage:
        return RenderedMessage(content=self.text)


class EmbedFieldSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    value: str
    inline: bool = False


class EmbedBlock(Block):
    """A free-form embed with optional fields and images."""

    type_name: ClassVar[str] = "embed"

    title: Optional[str] = None
    description: Optional[str] = None
    text: Optional[str] = None
    color: int = DISCORD_BLURPLE
    fields: List[EmbedFieldSpec] = Field(default_factory=list)
    image: Optional[str] = None
    thumbnail: Optional[str] = None

    @field_validator("color", mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> Any:
        return parse_color(value)

    @model_validator(mode="after")
    def _require_title_or_description(self) -> "EmbedBlock":
        if not (self.title or "").strip() and not (self.description or "").strip():
            raise ValueError("Must provide a title or a description")
        return self

    def build(self) -> RenderedMessage:
        return RenderedMessage(
            content=self.text,
            embed=Embed(
                title=self.title,
                description=self.description,
                color=self.color,
                fields=[EmbedField(f.name, f.value, f.inline) for f in self.fields],
                image=self.image,
                thumbnail=self.thumbnail,
            ),
        )


class BlockRegistry:
    """Maps document ``type`` tags to block classes."""

    def __init__(self):
        self._types: Dict[str, Type[Block]] = {}

    def register(self, block_cls: Type[Block]) -> Type[Block]:
        if not block_cls.type_name:
            raise ValueError(f"{block_cls.__name__} has no type_name")
        self._types[block_cls.type_name] = block_cls
        return block_cls

    def get(self, type_name: str) -> Optional[Type[Block]]:
        return self._types.get(type_name)

    @property
    def type_names(self) -> List[str]:
        return sorted(self._types)


def default_registry() -> BlockRegistry:
    """Registry with the built-in block variants."""
    registry = BlockRegistry()
    for block_cls in (LinksBlock, TextBlock, EmbedBlock):
        registry.register(block_cls)
    return registry
