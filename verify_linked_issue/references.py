"""Parse pull request bodies for GitHub issue references.

Recognised forms, optionally preceded by a closing keyword such as
``Fixes`` or ``Closes:``::

    #123
    GH-123
    owner/repo#123
    https://github.com/owner/repo/issues/123
    https://github.com/owner/repo/pull/123

Text inside fenced code blocks, inline code spans and HTML comments is
ignored, matching how GitHub itself renders references.
"""

import re
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field

CLOSING_KEYWORDS = (
    "close",
    "closes",
    "closed",
    "fix",
    "fixes",
    "fixed",
    "resolve",
    "resolves",
    "resolved",
)

DEFAULT_HOSTS = ("github.com",)

# Fenced blocks first so their backticks are not read as inline spans.
# An inline span closes on a backtick run of the same length.
_CODE_PATTERN = re.compile(
    r"```.*?(?:```|\Z)|~~~.*?(?:~~~|\Z)"
    r"|(?<!`)(`+)(?!`)[^\n]*?(?<!`)\1(?!`)"
    r"|<!--.*?(?:-->|\Z)",
    re.DOTALL,
)

_REFERENCE_TEMPLATE = r"""
    (?:
        (?<![\w-])(?P<action>{keywords})
        (?::\s*|\s+)
    )?
    (?:
        (?<![\w/.-])https?://(?:{hosts})/
        (?P<url_slug>[\w-]+/[\w.-]+)/(?:issues|pull)/(?P<url_number>\d+)
      |
        (?<![\w/.-])(?P<slug>[\w-]+/[\w.-]+)\#(?P<slug_number>\d+)
      |
        (?<![\w/\#-])(?:\#|gh-)(?P<number>\d+)
    )
    (?!\w)
"""


class IssueReference(BaseModel):
    """A candidate issue reference found in a pull request body."""

    model_config = ConfigDict(frozen=True)

    issue_number: int = Field(..., gt=0, description="Referenced issue number")
    slug: str | None = Field(
        None, description="owner/repo of the issue; None means the current repository"
    )
    raw: str = Field(..., description="Matched text, for logging")
    action: str | None = Field(
        None, description="Closing keyword preceding the reference, if any"
    )
    index: int = Field(0, ge=0, description="Offset of the match in the body")

    def target(self, owner: str, repo: str) -> tuple[str, str]:
        """Resolve the repository holding the issue.

        Args:
            owner: Owner of the repository the pull request belongs to
            repo: Name of the repository the pull request belongs to

        Returns:
            (owner, repo) of the referenced issue
        """
        if not self.slug:
            return owner, repo
        slug_owner, slug_repo = self.slug.split("/", 1)
        return slug_owner, slug_repo

    def __str__(self) -> str:
        prefix = f"{self.slug}#" if self.slug else "#"
        return f"{prefix}{self.issue_number}"


def server_hosts(server_url: str | None) -> tuple[str, ...]:
    """Hosts whose issue URLs count as references on a GitHub server.

    ``server_url`` is the runner's ``GITHUB_SERVER_URL``; GitHub Enterprise
    servers use their own hostname.
    """
    host = urlparse(server_url).hostname if server_url else None
    return (host,) if host else DEFAULT_HOSTS


def _blank(match: re.Match[str]) -> str:
    return " " * len(match.group(0))


def strip_code(body: str) -> str:
    """Blank out code and comments, keeping offsets of the remaining text."""
    return _CODE_PATTERN.sub(_blank, body)


def _compile(hosts: tuple[str, ...]) -> re.Pattern[str]:
    keywords = "|".join(sorted(CLOSING_KEYWORDS, key=len, reverse=True))
    host_pattern = "|".join(re.escape(host) for host in hosts)
    return re.compile(
        _REFERENCE_TEMPLATE.format(keywords=keywords, hosts=host_pattern),
        re.IGNORECASE | re.VERBOSE,
    )


_DEFAULT_PATTERN = _compile(DEFAULT_HOSTS)


def parse_references(
    body: str | None, hosts: tuple[str, ...] = DEFAULT_HOSTS
) -> list[IssueReference]:
    """Extract issue references from a pull request body.

    Args:
        body: Pull request description; None is treated as empty
        hosts: Hostnames accepted for issue and pull request URLs

    Returns:
        Unique references in order of first appearance
    """
    if not body:
        return []

    pattern = _DEFAULT_PATTERN if hosts == DEFAULT_HOSTS else _compile(hosts)
    text = strip_code(body)

    references: list[IssueReference] = []
    seen: set[tuple[str | None, int]] = set()
    for match in pattern.finditer(text):
        number = int(
            match.group("url_number")
            or match.group("slug_number")
            or match.group("number")
        )
        if number <= 0:
            continue

        slug = match.group("url_slug") or match.group("slug")
        key = (slug.lower() if slug else None, number)
        if key in seen:
            continue
        seen.add(key)

        references.append(
            IssueReference(
                issue_number=number,
                slug=slug,
                raw=match.group(0),
                action=match.group("action"),
                index=match.start(),
            )
        )

    return references
