"""Orchestrates an automatic release: tags, changelog, release and artifacts."""

import time

import structlog

from automatic_releases.changelog.generator import ChangelogGenerator
from automatic_releases.configuration.env import ActionsContext
from automatic_releases.configuration.models import ReleaseConfig
from automatic_releases.github.abc import GitHubClientBase
from automatic_releases.release.artifacts import upload_release_artifacts
from automatic_releases.release.exceptions import ReleaseApiError
from automatic_releases.release.history import CommitHistoryFetcher
from automatic_releases.release.models import ReleaseResult
from automatic_releases.release.tags import ReleaseTagResolver
from automatic_releases.utils.actions import export_variable, log_group, set_output
from automatic_releases.utils.constants import RELEASE_ID_OUTPUT, RELEASE_TAG_ENV_VAR, RELEASE_TAG_OUTPUT, UPLOAD_URL_OUTPUT

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def create_release_tag(client: GitHubClientBase, tag: str, sha: str, log: structlog.stdlib.BoundLogger | None = None) -> None:
    """Point the tag at sha, creating it or force-moving it when it already exists."""
    log = log or logger
    log.info("Creating release tag", tag=tag, sha=sha)
    try:
        await client.create_ref(f"refs/tags/{tag}", sha)
    except ReleaseApiError as exc:
        log.debug("Could not create release tag, updating the existing one", tag=tag, error=exc.message)
        await client.update_ref(f"tags/{tag}", sha, force=True)
        log.info("Moved existing release tag", tag=tag, sha=sha)
        return
    log.info("Created release tag", tag=tag, sha=sha)


async def delete_previous_release(client: GitHubClientBase, tag: str, log: structlog.stdlib.BoundLogger | None = None) -> None:
    """Delete the release currently associated with tag, if there is one."""
    log = log or logger
    release = await client.get_release_by_tag(tag)
    if release is None:
        log.info("Could not find a release associated with tag, nothing to delete", tag=tag)
        return
    log.info("Deleting previous release", tag=tag, release_id=release.id)
    await client.delete_release(release.id)


async def run_automatic_release(
    config: ReleaseConfig,
    client: GitHubClientBase,
    context: ActionsContext,
    log: structlog.stdlib.BoundLogger | None = None,
) -> ReleaseResult:
    """Generate a GitHub release for the current commit.

    The changelog covers the commits since the previous release. When an
    automatic release tag is configured, the tag is moved to the current
    commit and its previous release is replaced.
    """
    log = log or logger
    sha = context.GITHUB_SHA
    start_time = time.time()
    log.info("Starting automatic release", ref=context.GITHUB_REF, sha=sha, automatic_release_tag=config.automatic_release_tag)

    with log_group("Determining release tags"):
        tags = await ReleaseTagResolver(client, log=log).resolve(config.automatic_release_tag, context.GITHUB_REF)

    with log_group("Retrieving commit history"):
        commits = await CommitHistoryFetcher(client, log=log).commits_between(tags.previous, sha)

    with log_group("Generating changelog"):
        generator = ChangelogGenerator(client, strict_pull_request_lookup=config.strict_pull_request_lookup, log=log)
        changelog = await generator.generate(commits)

    if config.automatic_release_tag:
        with log_group("Generating release tag"):
            await create_release_tag(client, config.automatic_release_tag, sha, log=log)
        with log_group("Deleting previous release"):
            await delete_previous_release(client, config.automatic_release_tag, log=log)

    with log_group("Generating new GitHub release"):
        release = await client.create_release(
            tag_name=tags.current,
            name=config.title or tags.current,
            body=changelog,
            draft=config.draft,
            prerelease=config.prerelease,
        )
        log.info("Created release", release_id=release.id, tag=tags.current, html_url=release.html_url)

    assets = []
    if config.files:
        with log_group("Uploading release artifacts"):
            assets = await upload_release_artifacts(client, release, config.files, log=log)

    set_output(RELEASE_TAG_OUTPUT, tags.current, context.GITHUB_OUTPUT)
    set_output(RELEASE_ID_OUTPUT, release.id, context.GITHUB_OUTPUT)
    set_output(UPLOAD_URL_OUTPUT, release.upload_url, context.GITHUB_OUTPUT)
    export_variable(RELEASE_TAG_ENV_VAR, tags.current, context.GITHUB_ENV)

    log.info("Finished automatic release", release_tag=tags.current, release_id=release.id, duration=round(time.time() - start_time, 2))
    return ReleaseResult(
        release_tag=tags.current,
        previous_tag=tags.previous,
        release_id=release.id,
        upload_url=release.upload_url,
        changelog=changelog,
        html_url=release.html_url,
        assets=assets,
    )
