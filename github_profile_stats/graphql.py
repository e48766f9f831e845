"""GraphQL client and query builders for profile stats."""

import logging
import sys
import time

import httpx

from .models import DEFAULT_LANGUAGE_LIMIT, MAX_PAGE_SIZE, Partition

GRAPHQL_URL = "https://api.github.com/graphql"
API_VERSION = "2022-11-28"

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


class GraphQLError(Exception):
    """Raised when a GraphQL response carries an ``errors`` list."""

    def __init__(self, errors: list[dict]):
        self.errors = errors
        messages = " | ".join(
            e.get("message", "") if isinstance(e, dict) else str(e) for e in errors
        )
        super().__init__(f"GraphQL errors: {messages}")


def _log(msg: str):
    sys.stderr.write(f"[graphql] {msg}\n")
    sys.stderr.flush()


class GraphQLClient:
    """GitHub GraphQL client. One POST per query, no retries."""

    def __init__(
        self,
        token: str,
        url: str = GRAPHQL_URL,
        api_version: str = API_VERSION,
        timeout: float = 30.0,
    ):
        if not token:
            raise RuntimeError("GH_TOKEN is not set")
        self.url = url
        self._client = httpx.Client(
            headers={
                "Authorization": f"bearer {token}",
                "Content-Type": "application/json",
                "X-GitHub-Api-Version": api_version,
            },
            timeout=timeout,
        )
        self.queries = 0
        self.total_query_time = 0.0

    @property
    def avg_query_time(self) -> float:
        return self.total_query_time / self.queries if self.queries else 0

    def execute(self, query: str, variables: dict | None = None) -> dict:
        """Execute a query and return its ``data`` object.

        Raises httpx.HTTPStatusError on a non-2xx response and GraphQLError
        when the body reports application-level errors or is not a JSON
        object.
        """
        payload = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        t0 = time.time()
        try:
            resp = self._client.post(self.url, json=payload)
        finally:
            self.total_query_time += time.time() - t0
            self.queries += 1

        resp.raise_for_status()
        try:
            body = resp.json()
        except ValueError as e:
            _log(f"HTTP {resp.status_code} with a non-JSON body")
            raise GraphQLError([{"type": "INVALID_RESPONSE", "message": f"response is not JSON: {e}"}]) from e
        if not isinstance(body, dict):
            raise GraphQLError([{"type": "INVALID_RESPONSE", "message": "response is not a JSON object"}])
        # GraphQL can return 200 with errors
        if body.get("errors"):
            raise GraphQLError(body["errors"])
        return body.get("data") or {}

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def build_count_query() -> str:
    """Build the query for unpaginated totals and contribution counters."""
    return (
        "query($login: String!) {\n"
        "  user(login: $login) {\n"
        "    login\n"
        "    name\n"
        "    followers { totalCount }\n"
        "    organizations { totalCount }\n"
        "    ownedRepos: repositories(ownerAffiliations: OWNER) { totalCount }\n"
        "    orgRepos: repositories(ownerAffiliations: ORGANIZATION_MEMBER) { totalCount }\n"
        "    contributionsCollection {\n"
        "      totalCommitContributions\n"
        "      totalIssueContributions\n"
        "      totalPullRequestContributions\n"
        "      totalPullRequestReviewContributions\n"
        "      restrictedContributionsCount\n"
        "    }\n"
        "  }\n"
        "}"
    )


def build_detail_query(
    partitions: list[Partition],
    page_size: int = MAX_PAGE_SIZE,
    language_limit: int = DEFAULT_LANGUAGE_LIMIT,
) -> str:
    """Build the per-repository query, one aliased connection per partition.

    Commit history is fetched as a count only, and only when the default
    branch resolves to a commit.
    """
    parts = []
    for partition in partitions:
        parts.append(
            f"    {partition.value}: repositories(first: {page_size}, "
            f"ownerAffiliations: {partition.affiliation}, privacy: {partition.privacy}) {{\n"
            f"      totalCount\n"
            f"      nodes {{\n"
            f"        name\n"
            f"        stargazerCount\n"
            f"        forkCount\n"
            f"        isPrivate\n"
            f"        isFork\n"
            f"        pullRequests {{ totalCount }}\n"
            f"        defaultBranchRef {{\n"
            f"          target {{\n"
            f"            ... on Commit {{ history {{ totalCount }} }}\n"
            f"          }}\n"
            f"        }}\n"
            f"        languages(first: {language_limit}, orderBy: {{field: SIZE, direction: DESC}}) {{\n"
            f"          totalCount\n"
            f"          edges {{ size node {{ name }} }}\n"
            f"        }}\n"
            f"      }}\n"
            f"    }}"
        )
    return (
        "query($login: String!) {\n"
        "  user(login: $login) {\n"
        + "\n".join(parts)
        + "\n  }\n}"
    )
