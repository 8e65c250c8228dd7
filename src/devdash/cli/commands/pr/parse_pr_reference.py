"""Parse PR reference from user input."""

import re

from devdash.cli.ensure import fail


def parse_pr_reference(reference: str) -> int:
    """Parse PR number from plain number, #number, or GitHub URL.

    Accepts:
      - Plain number: "123" or "#123"
      - GitHub URL: "https://github.com/owner/repo/pull/123"

    Raises:
        SystemExit: If input format is invalid

    Examples:
        >>> parse_pr_reference("123")
        123
        >>> parse_pr_reference("https://github.com/owner/repo/pull/456")
        456
        >>> parse_pr_reference("https://github.com/owner/repo/pull/789#issuecomment-123")
        789
    """
    pattern = r"^(?:#?(\d+)|https?://[^/]+/[^/]+/[^/]+/pull/(\d+)(?:[/?#].*)?)$"
    match = re.match(pattern, reference.strip())

    if match is None:
        fail(
            f"Invalid PR number or URL: {reference}\n\n"
            "Expected formats:\n"
            "  • Plain number: 123\n"
            "  • GitHub URL: https://github.com/owner/repo/pull/456"
        )

    return int(match.group(1) or match.group(2))
