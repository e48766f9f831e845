"""Fetch account totals and per-partition repository details."""

import sys

import httpx

from ..graphql import GraphQLClient, GraphQLError, build_count_query, build_detail_query
from ..models import (
    AccountCounts,
    ContributionSummary,
    DEFAULT_LANGUAGE_LIMIT,
    FetchedStats,
    FetchResult,
    MAX_PAGE_SIZE,
    Partition,
    ReportShape,
    RepositoryRecord,
)


def _log(msg: str):
    sys.stderr.write(f"[stats] {msg}\n")
    sys.stderr.flush()


def _total(node: dict | None, key: str) -> int:
    """Read ``node[key].totalCount``, treating anything missing as zero."""
    if not node:
        return 0
    return (node.get(key) or {}).get("totalCount") or 0


def _commit_count(node: dict) -> int | None:
    ref = node.get("defaultBranchRef")
    if not ref:
        return None
    target = ref.get("target") or {}
    history = target.get("history")
    if history is None:
        # Default branch points at something other than a commit
        return None
    return history.get("totalCount") or 0


def parse_repository(node: dict, partition: Partition) -> RepositoryRecord:
    """Map a repository node onto a record tagged with its partition."""
    languages: dict[str, int] = {}
    lang_conn = node.get("languages") or {}
    for edge in lang_conn.get("edges") or []:
        name = (edge.get("node") or {}).get("name")
        if name:
            languages[name] = languages.get(name, 0) + (edge.get("size") or 0)

    record = RepositoryRecord(
        name=node.get("name") or "",
        partition=partition,
        stars=node.get("stargazerCount") or 0,
        forks=node.get("forkCount") or 0,
        is_private=bool(node.get("isPrivate", partition.is_private)),
        is_fork=bool(node.get("isFork")),
        commit_count=_commit_count(node),
        pull_requests=_total(node, "pullRequests"),
        languages=languages,
    )

    language_total = lang_conn.get("totalCount") or 0
    if language_total > len(languages):
        _log(
            f"warning: {record.name} has {language_total} languages, "
            f"only the largest {len(languages)} are counted"
        )
    return record


def parse_counts(user: dict) -> tuple[AccountCounts, ContributionSummary]:
    contributions = user.get("contributionsCollection") or {}
    counts = AccountCounts(
        owned_repos=_total(user, "ownedRepos"),
        org_repos=_total(user, "orgRepos"),
        organizations=_total(user, "organizations"),
    )
    summary = ContributionSummary(
        commits=contributions.get("totalCommitContributions") or 0,
        issues=contributions.get("totalIssueContributions") or 0,
        pull_requests=contributions.get("totalPullRequestContributions") or 0,
        reviews=contributions.get("totalPullRequestReviewContributions") or 0,
        restricted=contributions.get("restrictedContributionsCount") or 0,
        followers=_total(user, "followers"),
        organizations=counts.organizations,
    )
    return counts, summary


def parse_partitions(
    user: dict,
    partitions: list[Partition],
    page_size: int = MAX_PAGE_SIZE,
) -> dict[Partition, list[RepositoryRecord]]:
    """Parse the detail query; every requested partition gets a list, maybe empty."""
    result: dict[Partition, list[RepositoryRecord]] = {}
    for partition in partitions:
        conn = user.get(partition.value) or {}
        nodes = [n for n in conn.get("nodes") or [] if n]
        result[partition] = [parse_repository(n, partition) for n in nodes]

        if len(nodes) >= page_size:
            total = conn.get("totalCount")
            known = f" of {total}" if total is not None else ""
            _log(
                f"warning: {partition.value} reached the page cap "
                f"({len(nodes)}{known} repositories), results are likely truncated"
            )
    return result


def fetch_stats(
    client: GraphQLClient,
    login: str,
    shape: ReportShape | None = None,
    page_size: int = MAX_PAGE_SIZE,
    language_limit: int = DEFAULT_LANGUAGE_LIMIT,
) -> FetchResult:
    """Run the count query, then the detail query.

    Returns a FetchResult carrying either the stats or the error that aborted
    the fetch. Nothing is retried.
    """
    shape = shape or ReportShape()
    partitions = shape.partitions

    try:
        data = client.execute(build_count_query(), {"login": login})
        user = data.get("user")
        if not user:
            return FetchResult(error=f"User '{login}' not found")
        counts, summary = parse_counts(user)

        data = client.execute(
            build_detail_query(partitions, page_size=page_size, language_limit=language_limit),
            {"login": login},
        )
        detail = data.get("user")
        if not detail:
            return FetchResult(error=f"User '{login}' not found")
    except GraphQLError as e:
        return FetchResult(error=f"{e}\n{e.errors}")
    except httpx.HTTPError as e:
        return FetchResult(error=f"{type(e).__name__}: {e}")

    stats = FetchedStats(
        login=user.get("login") or login,
        name=user.get("name"),
        counts=counts,
        summary=summary,
        partitions=parse_partitions(detail, partitions, page_size),
    )
    return FetchResult(stats=stats)
