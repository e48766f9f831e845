"""Data models for profile stats."""

from dataclasses import dataclass, field
from enum import Enum

PLACEHOLDER = "—"  # rendered when there is nothing to rank

MAX_PAGE_SIZE = 100  # GraphQL connection cap; never paginated past
DEFAULT_LANGUAGE_LIMIT = 10  # languages fetched per repository
DEFAULT_TOP_LANGUAGES = 6
DEFAULT_START_MARKER = "<!--GITHUB_STATS_START-->"
DEFAULT_END_MARKER = "<!--GITHUB_STATS_END-->"


class Partition(Enum):
    """Ownership x visibility bucket a repository was fetched from.

    The value doubles as the GraphQL alias used in the detail query.
    """

    OWNED_PUBLIC = "ownedPublic"
    OWNED_PRIVATE = "ownedPrivate"
    ORG_PUBLIC = "orgPublic"
    ORG_PRIVATE = "orgPrivate"

    @property
    def is_owned(self) -> bool:
        return self in (Partition.OWNED_PUBLIC, Partition.OWNED_PRIVATE)

    @property
    def is_private(self) -> bool:
        return self in (Partition.OWNED_PRIVATE, Partition.ORG_PRIVATE)

    @property
    def affiliation(self) -> str:
        return "OWNER" if self.is_owned else "ORGANIZATION_MEMBER"

    @property
    def privacy(self) -> str:
        return "PRIVATE" if self.is_private else "PUBLIC"


@dataclass
class RepositoryRecord:
    name: str
    partition: Partition
    stars: int = 0
    forks: int = 0
    is_private: bool = False
    is_fork: bool = False
    commit_count: int | None = None  # None when there is no default branch
    pull_requests: int = 0
    languages: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ContributionSummary:
    commits: int = 0
    issues: int = 0
    pull_requests: int = 0
    reviews: int = 0
    restricted: int = 0
    followers: int = 0
    organizations: int = 0


@dataclass(frozen=True)
class AccountCounts:
    """Unpaginated totals from the count query.

    These are not guaranteed to match the lengths of the fetched partitions.
    """

    owned_repos: int = 0
    org_repos: int = 0
    organizations: int = 0

    @property
    def total_repos(self) -> int:
        return self.owned_repos + self.org_repos


@dataclass
class FetchedStats:
    login: str
    name: str | None
    counts: AccountCounts
    summary: ContributionSummary
    partitions: dict[Partition, list[RepositoryRecord]] = field(default_factory=dict)


@dataclass
class FetchResult:
    """Outcome of a fetch: exactly one of ``stats`` or ``error`` is set."""

    stats: FetchedStats | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LanguageShare:
    language: str
    bytes: int
    percentage: int

    def __str__(self) -> str:
        return f"{self.language} ({self.percentage}%)"


@dataclass
class AggregateReport:
    login: str
    name: str | None
    total_repos: int
    contributed_repos: int
    owned_contributed: int
    org_contributed: int
    forked_repos: int
    total_stars: int
    total_forks: int
    total_commits: int
    total_pull_requests: int
    languages: list[LanguageShare]
    summary: ContributionSummary
    generated_at: str

    @property
    def top_languages(self) -> str:
        """Comma-separated ranking, or the placeholder when empty."""
        if not self.languages:
            return PLACEHOLDER
        return ", ".join(str(lang) for lang in self.languages)


@dataclass(frozen=True)
class ReportShape:
    """Which partitions are queried and which sections get rendered."""

    include_org_repos: bool = True
    include_private_repos: bool = True
    show_repositories: bool = True
    show_contributions: bool = True
    show_community: bool = True
    show_languages: bool = True
    top_languages: int = DEFAULT_TOP_LANGUAGES

    @classmethod
    def from_settings(cls, settings) -> "ReportShape":
        return cls(
            include_org_repos=settings.include_org_repos,
            include_private_repos=settings.include_private_repos,
            show_repositories=settings.show_repositories,
            show_contributions=settings.show_contributions,
            show_community=settings.show_community,
            show_languages=settings.show_languages,
            top_languages=settings.top_languages,
        )

    @property
    def partitions(self) -> list[Partition]:
        """Partitions to fetch, in aggregation order."""
        return [
            p
            for p in Partition
            if (self.include_org_repos or p.is_owned)
            and (self.include_private_repos or not p.is_private)
        ]
