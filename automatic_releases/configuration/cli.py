"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from automatic_releases.changelog.generator import ChangelogGenerator
from automatic_releases.configuration.env import ActionsContext
from automatic_releases.configuration.reconcile import (
    load_event_payload,
    validate_actions_context,
    validate_release_configuration,
    validate_repo_token,
)
from automatic_releases.github.adapter import GitHubKitAdapter
from automatic_releases.release.history import CommitHistoryFetcher
from automatic_releases.release.orchestrator import run_automatic_release
from automatic_releases.release.tags import ReleaseTagResolver
from automatic_releases.utils.actions import set_failed
from automatic_releases.utils.logging_config import configure_logging

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def _create_adapter(repo_token: str | None, context: ActionsContext) -> GitHubKitAdapter:
    return GitHubKitAdapter.create(repo=context.GITHUB_REPOSITORY, repo_token=validate_repo_token(repo_token), github_api_url=context.GITHUB_API_URL)


@typer_app.command(name="release")
def release_cli(
    repo_token: Annotated[str | None, Option(envvar="INPUT_REPO_TOKEN", help="Token used to access the repository.")] = None,
    automatic_release_tag: Annotated[
        str | None,
        Option(envvar="INPUT_AUTOMATIC_RELEASE_TAG", help="Tag (e.g. 'latest') to move to the current commit and release."),
    ] = None,
    draft: Annotated[bool, Option(envvar="INPUT_DRAFT", help="Create the release as a draft.")] = False,
    prerelease: Annotated[bool, Option(envvar="INPUT_PRERELEASE", help="Mark the release as a pre-release.")] = True,
    title: Annotated[str | None, Option(envvar="INPUT_TITLE", help="Release title, defaults to the release tag.")] = None,
    files: Annotated[str | None, Option(envvar="INPUT_FILES", help="Newline-separated glob patterns of files to upload.")] = None,
    tolerate_pull_request_lookup_failures: Annotated[
        bool,
        Option(
            envvar="INPUT_TOLERATE_PULL_REQUEST_LOOKUP_FAILURES",
            help="List commits without pull requests when looking them up fails, instead of aborting.",
        ),
    ] = False,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Create a GitHub release with a changelog of the commits since the previous release."""
    context = ActionsContext()
    configure_logging(debug=debug or context.RUNNER_DEBUG)
    try:
        config = validate_release_configuration(
            repo_token=repo_token,
            automatic_release_tag=automatic_release_tag,
            draft=draft,
            prerelease=prerelease,
            title=title,
            files=files,
            strict_pull_request_lookup=not tolerate_pull_request_lookup_failures,
        )
        validate_actions_context(context)
        logger.debug("Triggering event payload", payload=load_event_payload(context))
        adapter = _create_adapter(config.repo_token, context)
        result = asyncio.run(run_automatic_release(config, adapter, context))
    except Exception as exc:
        set_failed(str(exc))
        raise
    typer.echo(f"Released {result.release_tag} (release ID {result.release_id})")
    for asset in result.assets:
        if not asset.uploaded:
            typer.echo(f"Failed to upload {asset.path}: {asset.error}", err=True)


@typer_app.command(name="changelog")
def changelog_cli(
    repo_token: Annotated[str | None, Option(envvar="INPUT_REPO_TOKEN", help="Token used to access the repository.")] = None,
    automatic_release_tag: Annotated[
        str | None,
        Option(envvar="INPUT_AUTOMATIC_RELEASE_TAG", help="Automatic release tag whose changelog is printed."),
    ] = None,
    ref: Annotated[str | None, Option(help="Git ref being released (e.g. refs/tags/v1.1.0), defaults to GITHUB_REF.")] = None,
    sha: Annotated[str | None, Option(help="Commit the changelog ends at, defaults to GITHUB_SHA.")] = None,
    tolerate_pull_request_lookup_failures: Annotated[
        bool,
        Option(
            envvar="INPUT_TOLERATE_PULL_REQUEST_LOOKUP_FAILURES",
            help="List commits without pull requests when looking them up fails, instead of aborting.",
        ),
    ] = False,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Print the changelog of the commits since the previous release without creating a release."""
    context = ActionsContext()
    context = context.model_copy(update={"GITHUB_REF": ref or context.GITHUB_REF, "GITHUB_SHA": sha or context.GITHUB_SHA})
    configure_logging(debug=debug or context.RUNNER_DEBUG)

    async def generate_changelog() -> str:
        adapter = _create_adapter(repo_token, context)
        tags = await ReleaseTagResolver(adapter).resolve(automatic_release_tag, context.GITHUB_REF)
        commits = await CommitHistoryFetcher(adapter).commits_between(tags.previous, context.GITHUB_SHA)
        generator = ChangelogGenerator(adapter, strict_pull_request_lookup=not tolerate_pull_request_lookup_failures)
        return await generator.generate(commits)

    try:
        validate_actions_context(context)
        changelog = asyncio.run(generate_changelog())
    except Exception as exc:
        set_failed(str(exc))
        raise
    typer.echo(changelog)


@typer_app.command(name="previous-tag")
def previous_tag_cli(
    tag: Annotated[str, Argument(help="Semantic version tag being released, e.g. v1.1.0.")],
    repo_token: Annotated[str | None, Option(envvar="INPUT_REPO_TOKEN", help="Token used to access the repository.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Print the tag of the release preceding TAG, or nothing for the first release."""
    context = ActionsContext()
    configure_logging(debug=debug or context.RUNNER_DEBUG)
    try:
        adapter = _create_adapter(repo_token, context)
        previous_tag = asyncio.run(ReleaseTagResolver(adapter).search_previous_tag(tag))
    except Exception as exc:
        set_failed(str(exc))
        raise
    typer.echo(previous_tag)


if __name__ == "__main__":
    typer_app()
