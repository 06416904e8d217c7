"""Download chapter images and point the chapter at the local copies."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from bs4 import Tag

from ..models import LocalAsset
from ..utils.exceptions import AssetDownloadError
from ..utils.urls import is_absolute_url, resolve_asset_url, url_basename


logger = logging.getLogger(__name__)

# Path segment Writebook serves original (full size) uploads from
ORIGINAL_ASSET_MARKER = "/u/"

LOCAL_IMAGES_PREFIX = "images/"

DownloadFn = Callable[[str], bytes]


class LocalizationReport(NamedTuple):
    """Images handled by one ``AssetLocalizer.localize`` call."""

    localized: list[LocalAsset]
    failed: list[str]


class AssetLocalizer:
    """Localizes the images of a content subtree.

    Every image is saved as ``{images_dir}/{chapter_slug}-{basename}``. An
    image already on disk is not downloaded again, so re-running a chapter
    only rewrites references. A failed download leaves the original ``src``
    in place and never aborts the chapter.
    """

    def __init__(self, origin: str, images_dir: Path, download_fn: DownloadFn):
        """Initialize the localizer.

        Args:
            origin: ``scheme://host`` used to resolve relative ``src`` values
            images_dir: Directory images are written to
            download_fn: Callable returning the body of an image URL
        """
        self.origin = origin
        self.images_dir = Path(images_dir)
        self.download_fn = download_fn

    def plan(self, src: str, chapter_slug: str) -> LocalAsset:
        """Work out where the image behind ``src`` is stored locally."""
        remote_url = resolve_asset_url(self.origin, src)
        local_filename = f"{chapter_slug}-{url_basename(remote_url) or 'image'}"
        return LocalAsset(
            remote_url=remote_url,
            local_filename=local_filename,
            local_path=self.images_dir / local_filename,
        )

    def _download(self, asset: LocalAsset) -> None:
        """Fetch ``asset`` unless it is already on disk.

        Raises:
            AssetDownloadError: If the download or the write fails
        """
        if asset.local_path.exists():
            logger.debug(f"Image already downloaded: {asset.local_path}")
            return

        try:
            data = self.download_fn(asset.remote_url)
            asset.local_path.parent.mkdir(parents=True, exist_ok=True)
            asset.local_path.write_bytes(data)
        except Exception as e:  # pylint: disable=broad-except
            raise AssetDownloadError(str(e) or e.__class__.__name__) from e

    @staticmethod
    def repair_image_links(content: Tag) -> None:
        """Point links wrapping a localized image at the local file.

        Writebook wraps images in a link to the original upload; once the
        image is local the link must not lead back to the remote site.
        """
        for link in content.find_all("a", href=True):
            image = link.find("img")
            if image is None:
                continue

            href = link["href"]
            src = image.get("src")
            if not isinstance(src, str) or not src.startswith(LOCAL_IMAGES_PREFIX):
                continue
            if ORIGINAL_ASSET_MARKER in href or is_absolute_url(href):
                link["href"] = src

    def localize(self, content: Tag, chapter_slug: str) -> LocalizationReport:
        """Download every image of ``content`` and rewrite its ``src`` in place.

        Args:
            content: Content subtree, mutated in place
            chapter_slug: Prefix for local filenames

        Returns:
            Localized assets and the URLs that failed
        """
        localized: list[LocalAsset] = []
        failed: list[str] = []

        for image in content.find_all("img", src=True):
            src = image["src"]
            if not isinstance(src, str) or not src.strip() or src.startswith("data:"):
                continue

            asset = self.plan(src, chapter_slug)
            try:
                self._download(asset)
            except AssetDownloadError as e:
                logger.warning(f"Failed to download image {asset.remote_url}: {e}")
                failed.append(asset.remote_url)
                continue

            image["src"] = asset.relative_src
            localized.append(asset)

        self.repair_image_links(content)
        return LocalizationReport(localized, failed)


def localize_images(
    content_node: Tag,
    origin: str,
    chapter_slug: str,
    images_dir: Path,
    download_fn: DownloadFn,
) -> Tag:
    """Localize the images of ``content_node`` in place and return it."""
    AssetLocalizer(origin, images_dir, download_fn).localize(content_node, chapter_slug)
    return content_node
