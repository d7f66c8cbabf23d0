"""Block catalog — downloads the block document and decodes it into blocks.

The document is a YAML list of mappings, each selecting its variant with a
``type`` key:

    - type: links
      title: Useful links
      links:
        Website: https://example.com

Decoding is all-or-nothing: any failure raises and no blocks are returned.
"""

import sys
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError

from channelkit.domain.blocks import Block, BlockRegistry, default_registry
from channelkit.errors import BlockValidationError, FetchError, ParseError
from channelkit.ports.outbound import DocumentTransport

TYPE_KEY = "type"


def _log(msg: str):
    print(msg, file=sys.stderr)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "block"
        parts.append(f"{loc}: {item.get('msg', '')}")
    return "; ".join(parts)


class BlockCatalog:
    """Fetches and decodes block documents."""

    def __init__(self, transport: DocumentTransport, registry: Optional[BlockRegistry] = None):
        self._transport = transport
        self._registry = registry or default_registry()

    @property
    def registry(self) -> BlockRegistry:
        return self._registry

    async def fetch(self, url: str) -> List[Block]:
        """Download ``url`` and decode it into an ordered list of blocks."""
        try:
            text = await self._transport.get_text(url)
        except FetchError:
            raise
        except Exception as e:
            raise FetchError("Failed to download the YAML file", url=url, cause=e) from e

        blocks = self.decode(text)
        _log(f"[catalog] {url}: {len(blocks)} block(s)")
        return blocks

    def decode(self, text: str) -> List[Block]:
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParseError("Failed to parse the given YAML", cause=e) from e

        if document is None:
            raise ParseError("Failed to parse the given YAML: empty document")
        if not isinstance(document, list):
            raise ParseError(
                f"Failed to parse the given YAML: expected a list of blocks, got {type(document).__name__}"
            )

        return [self._decode_record(index, record) for index, record in enumerate(document)]

    def _decode_record(self, index: int, record: Any) -> Block:
        if not isinstance(record, dict):
            raise ParseError(f"Block {index}: expected a mapping, got {type(record).__name__}")

        fields = dict(record)
        type_name = fields.pop(TYPE_KEY, None)
        if not isinstance(type_name, str) or not type_name:
            raise ParseError(f"Block {index}: missing '{TYPE_KEY}' key")

        block_cls = self._registry.get(type_name)
        if block_cls is None:
            known = ", ".join(self._registry.type_names)
            raise ParseError(f"Block {index}: unknown block type {type_name!r} (known: {known})")

        try:
            return block_cls.model_validate(fields)
        except ValidationError as e:
            raise BlockValidationError(
                f"Block {index} ({type_name}) is invalid: {_describe_validation_error(e)}",
                index=index,
                cause=e,
            ) from e
