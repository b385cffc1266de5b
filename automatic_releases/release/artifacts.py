"""Upload of release artifacts matched by glob patterns."""

import glob
import hashlib
from pathlib import Path

import structlog
from githubkit.exception import GitHubException

from automatic_releases.github.abc import GitHubClientBase
from automatic_releases.release.exceptions import ReleaseApiError
from automatic_releases.release.models import AssetUpload, CreatedRelease

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

# Errors that fail a single upload without aborting the batch.
UPLOAD_ERRORS = (ReleaseApiError, GitHubException, OSError)


def expand_globs(file_globs: list[str], log: structlog.stdlib.BoundLogger | None = None) -> list[Path]:
    """Expand glob patterns into the files they match, each pattern's matches sorted.

    A file matched by several patterns is only returned once.
    """
    log = log or logger
    paths: list[Path] = []
    for pattern in file_globs:
        matches = sorted(match for match in glob.glob(pattern, recursive=True) if Path(match).is_file())
        if not matches:
            log.error("Glob pattern did not match any files", pattern=pattern)
            continue
        for match in matches:
            path = Path(match)
            if path not in paths:
                paths.append(path)
    return paths


def hashed_asset_name(path: Path, content: bytes) -> str:
    """Name an asset after its file, with the MD5 of its content appended to the stem."""
    digest = hashlib.md5(content).hexdigest()
    return f"{path.stem}-{digest}{path.suffix}"


async def upload_artifact(
    client: GitHubClientBase, release: CreatedRelease, path: Path, log: structlog.stdlib.BoundLogger | None = None
) -> AssetUpload:
    """Upload one file to a release, retrying once under a hashed name when the upload fails.

    Read, transport and API errors are recorded in the returned AssetUpload
    instead of being raised.
    """
    log = log or logger
    name = path.name
    try:
        content = path.read_bytes()
    except OSError as exc:
        log.error("Could not read release artifact", path=str(path), error=str(exc))
        return AssetUpload(path=str(path), name=name, uploaded=False, error=str(exc))

    log.info("Uploading release artifact", path=str(path), name=name, size=len(content))
    try:
        await client.upload_release_asset(release.upload_url, name, content)
        return AssetUpload(path=str(path), name=name, uploaded=True)
    except UPLOAD_ERRORS as exc:
        log.warning("Problem uploading release artifact, retrying with a different name", path=str(path), name=name, error=str(exc))

    name = hashed_asset_name(path, content)
    try:
        await client.upload_release_asset(release.upload_url, name, content)
    except UPLOAD_ERRORS as exc:
        log.error("Problem uploading release artifact", path=str(path), name=name, error=str(exc))
        return AssetUpload(path=str(path), name=name, uploaded=False, error=str(exc))
    return AssetUpload(path=str(path), name=name, uploaded=True)


async def upload_release_artifacts(
    client: GitHubClientBase,
    release: CreatedRelease,
    file_globs: list[str],
    log: structlog.stdlib.BoundLogger | None = None,
) -> list[AssetUpload]:
    """Upload every file matched by file_globs to the release.

    A failed upload is logged and recorded in the returned list; the remaining
    files are still uploaded.
    """
    log = log or logger
    uploads: list[AssetUpload] = []
    for path in expand_globs(file_globs, log=log):
        uploads.append(await upload_artifact(client, release, path, log=log))
    failed = [upload.name for upload in uploads if not upload.uploaded]
    log.info(f"Uploaded {len(uploads) - len(failed)} of {len(uploads)} release artifacts", release_id=release.id, failed=failed)
    return uploads
