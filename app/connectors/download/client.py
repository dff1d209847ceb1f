"""DocCenter — Document Download Client.

Streams a remote document straight to disk in bounded chunks.
"""

import os
import time
import uuid
from typing import Optional

import httpx

from app.config import Settings, settings as default_settings
from app.core.errors import DownloadFailed, DownloadTimeout, FileWriteError
from app.core.logging import get_logger

logger = get_logger("download.client")


class FileDownloader:
    """Async HTTP client that saves a URL's body to a local file."""

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config = config or default_settings
        self.verify_tls = config.download_verify_tls
        self.timeout = config.download_timeout
        self.chunk_size = config.download_chunk_size
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        if not self.verify_tls:
            logger.warning("⚠️  TLS certificate verification is DISABLED for downloads")

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                verify=self.verify_tls,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def download(self, url: str, destination: str) -> int:
        """Save the body of ``url`` to ``destination``, overwriting it.

        Returns the number of bytes written. The body is streamed into a temp
        file that replaces ``destination`` only when complete, so a failed
        download leaves any previous file untouched.

        Raises:
            DownloadFailed: non-2xx status or transport error.
            DownloadTimeout: the source did not answer in time.
            FileWriteError: the destination could not be opened or written.
        """
        client = await self._get_client()
        try:
            async with client.stream("GET", url) as resp:
                if not resp.is_success:
                    raise DownloadFailed(
                        f"Download failed with status code {resp.status_code}",
                        status_code=resp.status_code,
                    )
                return await self._write_body(resp, destination)
        except httpx.TimeoutException as e:
            raise DownloadTimeout(f"Download timed out after {self.timeout}s: {e}") from e
        except httpx.RequestError as e:
            raise DownloadFailed(f"Download request failed: {e}") from e

    def _open_temp(self, directory: str):
        """Open a hidden temp file next to the destination; returns (path, file)."""
        temp_path = os.path.join(directory, f".{uuid.uuid4().hex}.part")
        return temp_path, open(temp_path, "xb")

    async def _write_body(self, resp: httpx.Response, destination: str) -> int:
        # The old file is only replaced once the new body is complete
        started = time.perf_counter()
        try:
            temp_path, fh = self._open_temp(os.path.dirname(destination) or ".")
        except (OSError, ValueError) as e:
            raise FileWriteError(f"Cannot open file for writing: {destination}: {e}") from e

        written = 0
        try:
            with fh:
                async for chunk in resp.aiter_bytes(self.chunk_size):
                    fh.write(chunk)
                    written += len(chunk)
            os.replace(temp_path, destination)
        except (OSError, ValueError) as e:
            _discard(temp_path)
            raise FileWriteError(f"Cannot write file {destination}: {e}") from e
        except BaseException:
            _discard(temp_path)
            raise

        logger.info(
            f"Downloaded {written} bytes",
            extra={
                "url": url_for_log(str(resp.url)),
                "path": destination,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return written


def _discard(path: str) -> None:
    """Remove a partial download, ignoring a file that is already gone."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove partial download: {e}", extra={"path": path})


def url_for_log(url: str) -> str:
    """Drop the query string, which often carries signed-URL credentials."""
    return url.split("?", 1)[0]
