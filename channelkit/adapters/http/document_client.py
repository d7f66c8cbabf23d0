"""Document client — downloads block documents with aiohttp."""

import asyncio

import aiohttp

from channelkit.errors import FetchError


class DocumentClient:
    """DocumentTransport implementation with an explicit request timeout."""

    def __init__(self, timeout: float = 30.0):
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_text(self, url: str) -> str:
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.get(url) as resp:
                    if resp.status >= 300:
                        body = await resp.text()
                        raise FetchError(
                            f"Failed to download the YAML file: HTTP {resp.status}: {body[:200]}",
                            url=url,
                            status=resp.status,
                        )
                    return await resp.text()
        except FetchError:
            raise
        except asyncio.TimeoutError as e:
            raise FetchError(f"Timed out downloading {url}", url=url, cause=e) from e
        except aiohttp.ClientError as e:
            raise FetchError("Failed to download the YAML file", url=url, cause=e) from e
