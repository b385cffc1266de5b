"""Custom exceptions raised while generating a release."""


class AutomaticReleaseError(Exception):
    """Base class for errors raised while generating a release."""


class InvalidVersionError(AutomaticReleaseError):
    """Raised when a release tag does not conform to semantic versioning."""

    def __init__(self, tag: str, message: str | None = None) -> None:
        """Initializes the exception with the offending tag."""
        super().__init__(message or f'The tag "{tag}" does not appear to conform to semantic versioning.')
        self.tag = tag


class MissingReleaseTagError(AutomaticReleaseError):
    """Raised when no release tag was configured and the run was not triggered by a tag."""

    def __init__(self, ref: str | None) -> None:
        """Initializes the exception with the ref that triggered the run."""
        super().__init__(
            'The parameter "automatic_release_tag" was not set and this does not appear to be a GitHub tag event. '
            f"(Event: {ref})"
        )
        self.ref = ref


class ComparisonFailure(AutomaticReleaseError):
    """Raised when the commits between two references cannot be compared."""

    def __init__(self, base: str, head: str, reason: str = "") -> None:
        """Initializes the exception with both ends of the comparison."""
        super().__init__(f"Could not compare commits between {base} and {head}" + (f" ({reason})" if reason else ""))
        self.base = base
        self.head = head
        self.reason = reason


class LookupFailure(AutomaticReleaseError):
    """Raised when looking up data for a single item (e.g. a commit's pull requests) fails."""

    def __init__(self, item: str, reason: str = "") -> None:
        """Initializes the exception with the item that could not be looked up."""
        super().__init__(f"Lookup failed for {item}" + (f" ({reason})" if reason else ""))
        self.item = item
        self.reason = reason


class ReleaseApiError(AutomaticReleaseError):
    """Raised when a GitHub API call that creates, updates or deletes data fails."""

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        """Initializes the exception with the failing operation and GitHub's message."""
        super().__init__(f"GitHub API error in {operation}: {message}")
        self.operation = operation
        self.message = message
        self.status_code = status_code
