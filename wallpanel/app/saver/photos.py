"""
Wallpaper photo fetching.

Every call pulls a fresh random image; nothing is cached between
rotations.
"""

import io

import httpx
from PIL import Image, ImageOps, UnidentifiedImageError

from ..exceptions import ImageFetchError
from ..utils.logger import get_logger

logger = get_logger("saver.photos")

DEFAULT_SOURCE_URL = "http://picsum.photos/{width}/{height}?random"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


class PhotoFetcher:
    """Fetches a random photo center-cropped to the requested size."""

    def __init__(
        self,
        source_url_template: str = DEFAULT_SOURCE_URL,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.source_url_template = source_url_template
        self.timeout = timeout
        self._transport = transport

    def build_url(self, width: int, height: int) -> str:
        return self.source_url_template.format(width=width, height=height)

    async def fetch(self, width: int, height: int) -> Image.Image:
        """
        Fetch and decode one photo.

        Args:
            width: Target width in pixels
            height: Target height in pixels

        Returns:
            Image of exactly (width, height)

        Raises:
            ImageFetchError: On transport, HTTP status or decode failure
        """
        url = self.build_url(width, height)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers=NO_CACHE_HEADERS,
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                payload = resp.content
        except httpx.HTTPError as e:
            raise ImageFetchError(f"Photo fetch from {url} failed: {e}", code="fetch") from e

        try:
            image = Image.open(io.BytesIO(payload))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageFetchError(f"Photo from {url} could not be decoded: {e}", code="decode") from e

        logger.debug(f"Fetched {image.size[0]}x{image.size[1]} photo from {url}")
        return ImageOps.fit(image.convert("RGB"), (width, height), centering=(0.5, 0.5))
