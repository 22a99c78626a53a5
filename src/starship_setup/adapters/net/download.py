"""
Download adapter — fetch a URL to a file.

The body is streamed to a ``.part`` sibling and renamed into place
only once the transfer completes, so a failed download never leaves
a truncated file at the destination.
"""

from __future__ import annotations

import hashlib
import logging
import os
import urllib.request
from pathlib import Path

from starship_setup.adapters.base import Adapter, ExecutionContext
from starship_setup.core.models.action import Receipt

logger = logging.getLogger(__name__)

USER_AGENT = "starship-setup/1.0"
_CHUNK = 8192


def _verify_checksum(path: Path, expected: str) -> bool:
    """Verify file checksum.  Format: ``algo:hex`` (sha256, sha1, md5)."""
    algo, expected_hash = expected.split(":", 1)
    h = hashlib.new(algo)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK), b""):
            h.update(chunk)
    return h.hexdigest() == expected_hash.lower()


class DownloadAdapter(Adapter):
    """Download a single resource to disk.

    Action params:
        url (str): Source URL (https://, http:// or file://).
        dest (str): Destination file path. Parent must exist.
        timeout (int | None): Socket timeout in seconds (default: none).
        checksum (str): Optional ``algo:hex`` digest to verify.
    """

    @property
    def name(self) -> str:
        return "download"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        params = context.action.params
        if not params.get("url"):
            return False, "Missing required param: 'url'"
        if not params.get("dest"):
            return False, "Missing required param: 'dest'"
        parent = Path(params["dest"]).parent
        if not parent.is_dir():
            return False, f"Destination directory does not exist: {parent}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        url = context.action.params["url"]
        dest = Path(context.action.params["dest"])
        timeout = context.action.params.get("timeout")
        checksum = context.action.params.get("checksum", "")
        partial = dest.with_name(dest.name + ".part")

        logger.debug("Downloading %s -> %s", url, dest)
        size = 0
        try:
            req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
            kwargs = {"timeout": timeout} if timeout else {}
            with urllib.request.urlopen(req, **kwargs) as resp:
                with open(partial, "wb") as f:
                    while True:
                        chunk = resp.read(_CHUNK)
                        if not chunk:
                            break
                        f.write(chunk)
                        size += len(chunk)

            if checksum and not _verify_checksum(partial, checksum):
                partial.unlink(missing_ok=True)
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Checksum mismatch for {url}",
                    metadata={"url": url},
                )

            os.replace(partial, dest)
        except Exception as exc:
            partial.unlink(missing_ok=True)
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Download failed: {exc}",
                metadata={"url": url, "dest": str(dest)},
            )

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"Downloaded {size} bytes to {dest}",
            metadata={"url": url, "dest": str(dest), "size": size},
        )
