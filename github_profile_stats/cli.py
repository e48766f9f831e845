"""CLI entry point: fetch stats and rewrite the README stats block."""

import argparse
import dataclasses
import sys
from pathlib import Path

from .aggregate import aggregate
from .fetch_stats import fetch_stats
from .graphql import GraphQLClient
from .models import ReportShape
from .readme import update_readme
from .render import render_report
from .settings import Settings, get_settings


def _log(msg: str):
    sys.stderr.write(f"[stats] {msg}\n")
    sys.stderr.flush()


def run(
    settings: Settings,
    readme: Path | None = None,
    dry_run: bool = False,
    shape: ReportShape | None = None,
) -> int:
    """Run the job once. Returns the process exit status."""
    if not settings.user or not settings.token:
        _log("error: GH_USER and GH_TOKEN must both be set")
        return 1

    shape = shape or ReportShape.from_settings(settings)
    readme = readme or Path(settings.readme_path)

    with GraphQLClient(
        settings.token,
        url=settings.api_url,
        api_version=settings.api_version,
        timeout=settings.timeout,
    ) as client:
        result = fetch_stats(
            client,
            settings.user,
            shape=shape,
            page_size=settings.page_size,
            language_limit=settings.language_limit,
        )
        queries = client.queries
        avg_ms = client.avg_query_time * 1000

    if not result.ok:
        _log(f"error: {result.error}")
        return 1

    report = aggregate(
        result.stats,
        top_n=shape.top_languages,
        include_org_repos=shape.include_org_repos,
    )
    block = render_report(report, shape)

    if dry_run:
        print(block)
        return 0

    if not update_readme(readme, block, settings.start_marker, settings.end_marker):
        _log(f"warning: markers not found in {readme}, content left as is")
    print(
        f"Updated {readme}: {report.contributed_repos} contributed repos, "
        f"{report.total_stars} stars ({queries}q, {avg_ms:.0f}ms/q)"
    )
    return 0


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Write GitHub profile stats into a marked README region",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Credentials are read from GH_USER and GH_TOKEN.",
    )
    parser.add_argument(
        "--readme",
        type=Path,
        default=None,
        help="Document to update (default: GH_README_PATH or README.md)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rendered block instead of writing the document",
    )
    parser.add_argument(
        "--no-org",
        action="store_true",
        help="Skip organization repositories",
    )

    args = parser.parse_args(argv)

    settings = get_settings()
    shape = ReportShape.from_settings(settings)
    if args.no_org:
        shape = dataclasses.replace(shape, include_org_repos=False)

    sys.exit(run(settings, readme=args.readme, dry_run=args.dry_run, shape=shape))


if __name__ == "__main__":
    main()
