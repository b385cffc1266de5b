"""Conventional commit message parser.

Splits a raw commit message into header, body and footer and extracts the
conventional commit fields of the header (``type(scope)!: subject``). The
footer is the trailing block of ``Token: value`` / ``Token #value`` lines that
starts a paragraph. Parsing never raises: a message without a conventional
header still yields a record, just with no type, scope or subject.
"""

from automatic_releases.changelog.models import FooterToken, Note, ParsedMessage, Revert
from automatic_releases.utils.constants import (
    BREAKING_CHANGE_NOTE_TOKENS,
    FOOTER_TOKEN_PATTERN,
    HEADER_PATTERN,
    MERGE_PATTERN,
    REVERT_PATTERN,
)


def _split_lines(message: str | None) -> list[str]:
    """Split a message into lines, dropping leading and trailing blank lines."""
    if not message:
        return []
    lines = [line.rstrip() for line in message.replace("\r\n", "\n").replace("\r", "\n").split("\n")]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def _find_footer_start(lines: list[str]) -> int:
    """Index of the first line of the footer, or len(lines) when there is no footer."""
    for index, line in enumerate(lines):
        starts_paragraph = index > 0 and not lines[index - 1]
        if starts_paragraph and FOOTER_TOKEN_PATTERN.match(line):
            return index
    return len(lines)


def _parse_footer_tokens(lines: list[str]) -> tuple[FooterToken, ...]:
    """Extract footer tokens; lines that do not start a token continue the previous value."""
    entries: list[list[str]] = []
    for line in lines:
        match = FOOTER_TOKEN_PATTERN.match(line)
        if match:
            entries.append([match.group(1), match.group(2).strip(), match.group(3)])
        elif entries:
            entries[-1][2] += "\n" + line
    return tuple(FooterToken(token=token, separator=separator, value=value.strip()) for token, separator, value in entries)


def _join(lines: list[str]) -> str | None:
    text = "\n".join(lines).strip()
    return text or None


def parse_commit_message(message: str | None) -> ParsedMessage:
    """Parse a raw commit message into its conventional commit structure."""
    lines = _split_lines(message)
    if not lines:
        return ParsedMessage()

    merge = None
    if MERGE_PATTERN.match(lines[0]):
        merge = lines.pop(0)
        while lines and not lines[0]:
            lines.pop(0)
        if not lines:
            return ParsedMessage(header=merge, merge=merge)

    header = lines[0]
    header_match = HEADER_PATTERN.match(header)
    commit_type = scope = subject = None
    breaking_indicator = False
    if header_match:
        commit_type = header_match.group(1) or None
        scope = header_match.group(2) or None
        breaking_indicator = header_match.group(3) is not None
        subject = header_match.group(4)

    remaining = lines[1:]
    footer_start = _find_footer_start(remaining)
    footer_lines = remaining[footer_start:]
    footer_tokens = _parse_footer_tokens(footer_lines)
    notes = tuple(Note(title=token.token, text=token.value) for token in footer_tokens if token.token in BREAKING_CHANGE_NOTE_TOKENS)

    revert = None
    revert_match = REVERT_PATTERN.match("\n".join(lines))
    if revert_match:
        revert = Revert(header=revert_match.group(1), sha=revert_match.group(2))

    return ParsedMessage(
        header=header,
        body=_join(remaining[:footer_start]),
        footer=_join(footer_lines),
        type=commit_type,
        scope=scope,
        subject=subject,
        merge=merge,
        breaking_indicator=breaking_indicator,
        notes=notes,
        footer_tokens=footer_tokens,
        revert=revert,
    )
