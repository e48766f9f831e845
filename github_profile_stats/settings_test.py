"""Unit tests for settings module."""

import pytest
from pydantic import ValidationError

from .graphql import build_detail_query
from .models import DEFAULT_LANGUAGE_LIMIT, DEFAULT_TOP_LANGUAGES, MAX_PAGE_SIZE, ReportShape
from .settings import Settings


def describe_Settings():

    def it_reads_prefixed_environment(monkeypatch):
        monkeypatch.setenv("GH_USER", "octocat")
        monkeypatch.setenv("GH_TOKEN", "secret")
        monkeypatch.setenv("GH_PAGE_SIZE", "50")
        monkeypatch.setenv("GH_INCLUDE_ORG_REPOS", "false")

        settings = Settings(_env_file=None)

        assert settings.user == "octocat"
        assert settings.token == "secret"
        assert settings.page_size == 50
        assert settings.include_org_repos is False

    def it_has_defaults(monkeypatch):
        for name in ("GH_USER", "GH_TOKEN", "GH_README_PATH", "GH_PAGE_SIZE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.user is None
        assert settings.token is None
        assert settings.readme_path == "README.md"
        assert settings.start_marker == "<!--GITHUB_STATS_START-->"
        assert settings.end_marker == "<!--GITHUB_STATS_END-->"
        assert settings.page_size == 100
        assert settings.language_limit == 10
        assert settings.top_languages == 6

    def it_shares_defaults_with_query_and_report_shape(monkeypatch):
        for name in ("GH_PAGE_SIZE", "GH_LANGUAGE_LIMIT", "GH_TOP_LANGUAGES"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.page_size == MAX_PAGE_SIZE
        assert settings.language_limit == DEFAULT_LANGUAGE_LIMIT
        assert ReportShape.from_settings(settings).top_languages == DEFAULT_TOP_LANGUAGES
        assert ReportShape().top_languages == DEFAULT_TOP_LANGUAGES
        assert build_detail_query(ReportShape().partitions) == build_detail_query(
            ReportShape().partitions, settings.page_size, settings.language_limit
        )

    def it_rejects_out_of_range_limits():
        for overrides in (
            {"page_size": 250},
            {"page_size": 0},
            {"language_limit": 0},
            {"language_limit": 101},
            {"top_languages": 0},
        ):
            with pytest.raises(ValidationError):
                Settings(_env_file=None, **overrides)

    def it_rejects_oversized_page_from_environment(monkeypatch):
        monkeypatch.setenv("GH_PAGE_SIZE", "500")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
