"""Render an AggregateReport as the markdown block placed in the README."""

from .models import AggregateReport, ReportShape


def _format_number(n: int) -> str:
    return f"{n:,}"


def render_report(report: AggregateReport, shape: ReportShape | None = None) -> str:
    shape = shape or ReportShape()
    lines = [f"**GitHub Stats for @{report.login}**", ""]

    if shape.show_repositories:
        lines += [
            "**Repository Statistics**",
            "",
            f"- Total Repositories: **{_format_number(report.total_repos)}**",
            f"- Contributed Repositories: **{_format_number(report.contributed_repos)}**"
            f" ({report.owned_contributed} owned, {report.org_contributed} organization)",
            f"- Forked Repositories: **{_format_number(report.forked_repos)}**",
            f"- Total Stars: **{_format_number(report.total_stars)}**",
            f"- Total Forks: **{_format_number(report.total_forks)}**",
            f"- Commits in Repositories: **{_format_number(report.total_commits)}**",
            f"- Pull Requests in Repositories: **{_format_number(report.total_pull_requests)}**",
            "",
        ]

    if shape.show_contributions:
        summary = report.summary
        lines += [
            "**Contribution Statistics**",
            "",
            f"- Commits: **{_format_number(summary.commits)}**",
            f"- Issues: **{_format_number(summary.issues)}**",
            f"- Pull Requests: **{_format_number(summary.pull_requests)}**",
            f"- Reviews: **{_format_number(summary.reviews)}**",
            f"- Private Contributions: **{_format_number(summary.restricted)}**",
            "",
        ]

    if shape.show_community:
        lines += [
            "**Community**",
            "",
            f"- Followers: **{_format_number(report.summary.followers)}**",
            f"- Organizations: **{_format_number(report.summary.organizations)}**",
            "",
        ]

    if shape.show_languages:
        lines += [
            "**Top Languages**",
            "",
            f"- {report.top_languages}",
            "",
        ]

    lines.append(f"_Last updated: {report.generated_at}_")
    return "\n".join(lines)
