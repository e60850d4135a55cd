"""
Frontmatter codec for article files.

An article file is a metadata block followed by the markdown body:

    ---
    title: Hello
    createdAt: 2024-06-01T12:00:00.000Z
    ---

    # Body text

Metadata lines are ``key: value`` pairs split on the first colon. Nothing is
escaped, so keys may not contain colons and values may not contain newlines.
Decoding is best-effort and never raises: text without a block is returned
as body-only.
"""
import re
from typing import Dict, Mapping, Tuple

DELIMITER = "---"
SEPARATOR = "\n\n"

_BLOCK_RE = re.compile(r"\A---\n(.*?)^---$", re.DOTALL | re.MULTILINE)


def _validate_entry(key: str, value: str) -> None:
    if not key or key != key.strip():
        raise ValueError(f"Invalid metadata key: {key!r}")
    if ":" in key or "\n" in key or "\r" in key:
        raise ValueError(f"Metadata key may not contain ':' or newlines: {key!r}")
    if "\n" in value or "\r" in value:
        raise ValueError(f"Metadata value for {key!r} may not contain newlines")


def encode(metadata: Mapping[str, str], body: str) -> str:
    """
    Serialize metadata and body into a single text blob.

    Args:
        metadata: Ordered key/value pairs, written in iteration order.
        body: Markdown body, written verbatim.

    Returns:
        The encoded file contents.

    Raises:
        ValueError: If a key or value cannot be represented in the format.
    """
    lines = [DELIMITER]
    for key, value in metadata.items():
        value = "" if value is None else str(value)
        _validate_entry(key, value)
        lines.append(f"{key}: {value}")
    lines.append(DELIMITER)
    return "\n".join(lines) + SEPARATOR + body


def parse_metadata(block: str) -> Dict[str, str]:
    """Parse the lines of a metadata block into a dict (later keys win)."""
    metadata: Dict[str, str] = {}
    for line in block.split("\n"):
        line = line.rstrip("\r")
        if not line.strip() or ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if not key:
            continue
        # drop the single space written after the colon by encode()
        if value.startswith(" "):
            value = value[1:]
        metadata[key] = value
    return metadata


def decode(text: str) -> Tuple[Dict[str, str], str]:
    """
    Split a text blob into its metadata and body.

    Args:
        text: File contents.

    Returns:
        Tuple of (metadata, body). Metadata is empty when the text has no
        leading ``---`` block, in which case the body is the stripped text.
    """
    match = _BLOCK_RE.match(text)
    if match is None:
        return {}, text.strip()

    metadata = parse_metadata(match.group(1))
    rest = text[match.end():]
    if rest.startswith(SEPARATOR):
        return metadata, rest[len(SEPARATOR):]
    return metadata, rest.strip()
