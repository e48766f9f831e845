"""Combine fetched partitions into one AggregateReport."""

from datetime import datetime, timezone

from .models import (
    DEFAULT_TOP_LANGUAGES,
    AggregateReport,
    FetchedStats,
    LanguageShare,
    RepositoryRecord,
)


def is_contributed(record: RepositoryRecord) -> bool:
    """Owned repos always count; org repos count once their default branch has commits.

    The commit count is per repository, not per author, so this both over-
    and under-counts what the viewer actually touched.
    """
    if record.partition.is_owned:
        return True
    return (record.commit_count or 0) > 0


def percentage_of(part: int, total: int) -> int:
    """Whole percentage of ``part`` in ``total``, halves rounded up (14.5 -> 15).

    Integer arithmetic, so exact halves are never lost to float error.
    Both values are byte counts, never negative; ``total`` must be positive.
    """
    return (200 * part + total) // (2 * total)


def rank_languages(
    repos: list[RepositoryRecord], top_n: int = DEFAULT_TOP_LANGUAGES
) -> list[LanguageShare]:
    """Merge language byte maps and return the ``top_n`` largest.

    Ties keep first-seen order. Each percentage is rounded on its own, so
    the shown values need not add up to 100. Empty when no bytes were seen.
    """
    merged: dict[str, int] = {}
    for repo in repos:
        for language, size in repo.languages.items():
            merged[language] = merged.get(language, 0) + size

    total = sum(merged.values())
    if total == 0:
        return []

    ranked = sorted(merged.items(), key=lambda item: item[1], reverse=True)
    return [
        LanguageShare(language=name, bytes=size, percentage=percentage_of(size, total))
        for name, size in ranked[:top_n]
    ]


def _isoformat(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def aggregate(
    stats: FetchedStats,
    top_n: int = DEFAULT_TOP_LANGUAGES,
    include_org_repos: bool = True,
    now: datetime | None = None,
) -> AggregateReport:
    """Build the report for one run from already-fetched data.

    With ``include_org_repos`` off, the repository total counts owned
    repositories only, matching what was fetched.
    """
    counts = stats.counts
    total_repos = counts.total_repos if include_org_repos else counts.owned_repos
    candidates = [repo for records in stats.partitions.values() for repo in records]
    included = [repo for repo in candidates if is_contributed(repo)]
    owned = sum(1 for repo in included if repo.partition.is_owned)

    return AggregateReport(
        login=stats.login,
        name=stats.name,
        total_repos=total_repos,
        contributed_repos=len(included),
        owned_contributed=owned,
        org_contributed=len(included) - owned,
        forked_repos=sum(1 for repo in included if repo.is_fork),
        total_stars=sum(repo.stars for repo in included),
        total_forks=sum(repo.forks for repo in included),
        total_commits=sum(repo.commit_count or 0 for repo in included),
        total_pull_requests=sum(repo.pull_requests or 0 for repo in included),
        languages=rank_languages(included, top_n),
        summary=stats.summary,
        generated_at=_isoformat(now or datetime.now(timezone.utc)),
    )
