"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass, field


@dataclass
class ReleaseConfig:
    """Validated inputs of an automatic release run."""

    repo_token: str
    automatic_release_tag: str | None = None
    draft: bool = False
    prerelease: bool = True
    title: str | None = None
    files: list[str] = field(default_factory=list)
    strict_pull_request_lookup: bool = True
