"""Streaming client for the compressed product dump."""

import zlib
from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx

from recipe_nutrition.domain.errors import CatalogSyncError
from recipe_nutrition.services.ingestion import DumpSource

# Accept both gzip and zlib headers.
_WBITS = zlib.MAX_WBITS | 32


@dataclass
class HttpxDumpSource(DumpSource):
    """HTTPX-backed source that decompresses a ``.jsonl.gz`` dump on the fly."""

    url: str
    http_client: httpx.AsyncClient
    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    chunk_size: int = 64 * 1024

    @classmethod
    def create(
        cls,
        url: str,
        connect_timeout_seconds: float = 10.0,
        read_timeout_seconds: float = 60.0,
    ) -> "HttpxDumpSource":
        """Create a dump source with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(follow_redirects=True),
            connect_timeout_seconds=connect_timeout_seconds,
            read_timeout_seconds=read_timeout_seconds,
        )

    async def iter_lines(self) -> AsyncIterator[str]:
        """Yield dump lines while downloading; nothing is buffered beyond a chunk."""
        timeout = httpx.Timeout(
            self.read_timeout_seconds, connect=self.connect_timeout_seconds
        )
        decoder = _GzipLineDecoder()
        try:
            async with self.http_client.stream(
                "GET", self.url, timeout=timeout, follow_redirects=True
            ) as response:
                response.raise_for_status()
                async for chunk in response.aiter_raw(self.chunk_size):
                    for line in decoder.feed(chunk):
                        yield line
            for line in decoder.finish():
                yield line
        except httpx.HTTPError as exc:
            raise CatalogSyncError(f"Dump download failed: {exc}") from exc
        except zlib.error as exc:
            raise CatalogSyncError(f"Dump decompression failed: {exc}") from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


class _GzipLineDecoder:
    """Incremental gzip decoder that splits output into text lines."""

    def __init__(self) -> None:
        self._decompressor = zlib.decompressobj(_WBITS)
        self._pending = b""

    def feed(self, chunk: bytes) -> list[str]:
        data = self._decompressor.decompress(chunk)
        # Concatenated gzip members each need a fresh decompressor.
        while self._decompressor.eof and self._decompressor.unused_data:
            leftover = self._decompressor.unused_data
            self._decompressor = zlib.decompressobj(_WBITS)
            data += self._decompressor.decompress(leftover)
        return self._split(data)

    def finish(self) -> list[str]:
        data = self._decompressor.flush()
        if not self._decompressor.eof:
            raise CatalogSyncError("Dump stream ended before the compressed data did")
        lines = self._split(data)
        if self._pending:
            lines.append(self._pending.decode("utf-8", errors="replace"))
            self._pending = b""
        return lines

    def _split(self, data: bytes) -> list[str]:
        if not data:
            return []
        *complete, self._pending = (self._pending + data).split(b"\n")
        return [line.decode("utf-8", errors="replace") for line in complete]
