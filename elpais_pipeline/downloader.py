"""
elpais_pipeline/downloader.py
-----------------------------
Saves article cover images to disk.
"""

import logging
import re
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; ElPaisScraper/1.0)"


def image_filename(image_url: str) -> str:
    """Last path segment of *image_url*, query stripped, unsafe chars → '_'."""
    name = image_url.rsplit("/", 1)[-1].split("?", 1)[0]
    name = re.sub(r"[^a-zA-Z0-9._-]", "_", name)
    # "", "." and ".." would point at the directory itself
    if not name.strip("."):
        return "image"
    return name


def save_image(image_url: str | None, dest_dir) -> str | None:
    """
    Download *image_url* into *dest_dir*. Returns the saved path, or None if
    there was nothing to save or the download failed. A file that already
    exists is not fetched again.
    """
    if not image_url or not image_url.strip():
        logger.debug("No image URL provided, skipping.")
        return None

    dest_path = Path(dest_dir) / image_filename(image_url)
    if dest_path.exists():
        logger.debug("Image already exists: %s", dest_path)
        return str(dest_path)

    try:
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        resp = requests.get(
            image_url, headers={"User-Agent": USER_AGENT}, timeout=15, stream=True
        )
        resp.raise_for_status()
        with open(dest_path, "wb") as fh:
            for chunk in resp.iter_content(chunk_size=8192):
                fh.write(chunk)
        return str(dest_path)
    except (requests.RequestException, OSError) as exc:
        logger.warning("Image download failed: %s", exc)
        dest_path.unlink(missing_ok=True)
        return None
