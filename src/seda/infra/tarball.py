"""Infrastructure: repository tarball download and extraction.

Downloads go through httpx with redirects followed (GitHub archive URLs
redirect to codeload).  The file is written under a temporary name and
renamed on completion so a cancelled download never poisons the cache.

Extraction strips the archive's single top-level directory
(``<name>-<commit>/``) and relies on tarfile's ``data`` filter to reject
absolute paths, ``..`` components, and links escaping the destination.
"""

from __future__ import annotations

import tarfile
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from typing import Any

import httpx

from seda.exceptions import ArchiveDownloadError, ArchiveExtractionError

_CHUNK_SIZE: int = 64 * 1024


class HttpTarballFetcher:
    """Concrete :class:`ArchiveFetcher` backed by an :class:`httpx.Client`.

    Parameters
    ----------
    client:
        Client to use.  When omitted, one is created per download and
        closed afterwards.
    """

    def __init__(self, client: httpx.Client | None = None, timeout: float = 30.0) -> None:
        self._client = client
        self._timeout = timeout

    def fetch(
        self,
        url: str,
        dest: Path,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        """Stream *url* into *dest*.

        Raises
        ------
        ArchiveDownloadError
            On HTTP errors, transport errors, or local write failures.
        """
        partial = dest.with_name(dest.name + ".part")
        owns_client = self._client is None
        client = self._client or httpx.Client(timeout=self._timeout)

        try:
            with client.stream("GET", url, follow_redirects=True) as response:
                response.raise_for_status()
                total = _content_length(response)
                downloaded = 0
                with partial.open("wb") as fh:
                    for chunk in response.iter_bytes(_CHUNK_SIZE):
                        fh.write(chunk)
                        downloaded += len(chunk)
                        if progress_callback is not None:
                            progress_callback({
                                "status": "downloading",
                                "downloaded_bytes": downloaded,
                                "total_bytes": total,
                                "filename": dest.name,
                            })
            partial.replace(dest)
        except httpx.HTTPStatusError as exc:
            partial.unlink(missing_ok=True)
            raise ArchiveDownloadError(
                f"failed to download repository: HTTP {exc.response.status_code} for {url}",
                hint="The repository may be private or the commit unavailable.",
            ) from exc
        except httpx.HTTPError as exc:
            partial.unlink(missing_ok=True)
            raise ArchiveDownloadError(
                f"failed to download repository: {exc}",
                hint="Check your network connection.",
            ) from exc
        except OSError as exc:
            partial.unlink(missing_ok=True)
            raise ArchiveDownloadError(f"could not write {dest}: {exc}") from exc
        finally:
            if owns_client:
                client.close()

        if progress_callback is not None:
            progress_callback({"status": "finished", "filename": dest.name})


def _content_length(response: httpx.Response) -> int | None:
    raw = response.headers.get("content-length")
    if raw is None or not raw.isdigit():
        return None
    return int(raw)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def _relocate(name: str, subdir: str | None) -> str | None:
    """Map an archive member name to its path below the destination.

    Returns ``None`` for members outside the wanted tree (and for the
    top-level directory itself).
    """
    parts = PurePosixPath(name).parts[1:]
    if subdir:
        prefix = PurePosixPath(subdir.strip("/")).parts
        if tuple(parts[: len(prefix)]) != prefix:
            return None
        parts = parts[len(prefix):]
    if not parts:
        return None
    return str(PurePosixPath(*parts))


def extract_tarball(tarball: Path, destination: Path, subdir: str | None = None) -> None:
    """Extract *tarball* into *destination*, stripping the top directory.

    Parameters
    ----------
    tarball:
        A gzip-compressed repository archive.
    destination:
        Existing directory to extract into.  Existing files are
        overwritten.
    subdir:
        Optional ``/sub/dir`` inside the repository; only that subtree is
        extracted, rooted at *destination*.

    Raises
    ------
    ArchiveExtractionError
        If the archive is unreadable, unsafe, or *subdir* matched nothing.
    """
    extracted = 0
    try:
        with tarfile.open(tarball, "r:gz") as tar:
            for member in tar.getmembers():
                target = _relocate(member.name, subdir)
                if target is None:
                    continue
                if member.islnk():
                    # Hard links name another member, which moved too.
                    link_target = _relocate(member.linkname, subdir)
                    if link_target is None:
                        continue
                    member = member.replace(linkname=link_target)
                tar.extract(member.replace(name=target), destination, filter="data")
                extracted += 1
    except (tarfile.TarError, OSError) as exc:
        raise ArchiveExtractionError(
            f"failed to extract {tarball.name}: {exc}",
            hint="Delete the cached tarball and try again.",
        ) from exc

    if subdir and extracted == 0:
        raise ArchiveExtractionError(f"sub-directory {subdir!r} not found in archive")
