"""Tests for latestnews.settings and latestnews.profiles."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from latestnews.exceptions import ProfileError
from latestnews.profiles import SiteProfile, domain_matches, load_profile
from latestnews.settings import ScraperSettings, load_settings

PROFILE = """\
default:
  strict: true
  ready_timeout_ms: 5000
domains:
  example.test:
    link_selector: ".teaser a"
    site_name: Example
  news.example.test:
    link_selector: ".latest a"
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("LATESTNEWS_BASE_URL", "LATESTNEWS_ENGINE", "LATESTNEWS_STRICT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def profile_path(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text(PROFILE, encoding="utf-8")
    return path


class TestDefaults:
    def test_yle_defaults(self):
        s = ScraperSettings()
        assert s.base_url == "https://yle.fi"
        assert s.link_selector == ".underlay-link"
        assert s.content_selectors == ["article", "div.yle__article__content", "main"]
        assert s.ready_selectors == ["article", "div.yle__article__content"]

    def test_timeouts(self):
        s = ScraperSettings()
        assert s.homepage_timeout_ms == 60_000
        assert s.article_timeout_ms == 60_000
        assert s.link_timeout_ms == 30_000
        assert s.ready_timeout_ms == 15_000
        assert s.run_timeout_ms is None

    def test_not_strict_by_default(self):
        assert ScraperSettings().strict is False


class TestValidation:
    def test_relative_base_url_rejected(self):
        with pytest.raises(ValidationError):
            ScraperSettings(base_url="yle.fi")

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            ScraperSettings(link_selectr=".x")

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            ScraperSettings(link_timeout_ms=0)

    def test_empty_content_selectors_rejected(self):
        with pytest.raises(ValidationError):
            ScraperSettings(content_selectors=["  "])

    def test_unknown_engine_rejected(self):
        with pytest.raises(ValidationError):
            ScraperSettings(engine="selenium")


class TestLoadSettings:
    def test_env_overrides_defaults(self, monkeypatch):
        monkeypatch.setenv("LATESTNEWS_BASE_URL", "https://example.test")
        monkeypatch.setenv("LATESTNEWS_ENGINE", "static")
        monkeypatch.setenv("LATESTNEWS_STRICT", "yes")
        s = load_settings()
        assert s.base_url == "https://example.test"
        assert s.engine == "static"
        assert s.strict is True

    def test_none_overrides_ignored(self):
        s = load_settings(base_url=None, engine=None)
        assert s.base_url == "https://yle.fi"
        assert s.engine == "browser"

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("LATESTNEWS_ENGINE", "static")
        assert load_settings(engine="browser").engine == "browser"

    def test_profile_matches_base_url_domain(self, profile_path):
        s = load_settings(profile_path, base_url="https://example.test")
        assert s.link_selector == ".teaser a"
        assert s.site_name == "Example"
        assert s.strict is True
        assert s.ready_timeout_ms == 5000

    def test_overrides_beat_profile(self, profile_path):
        s = load_settings(profile_path, base_url="https://example.test", strict=False)
        assert s.strict is False

    def test_profile_for_unmatched_domain_uses_default_block(self, profile_path):
        s = load_settings(profile_path)
        assert s.link_selector == ".underlay-link"
        assert s.strict is True

    def test_invalid_profile_value_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("default:\n  engine: carrier-pigeon\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_settings(path)

    def test_profile_base_url_selects_domain_block(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text(
            "default:\n  base_url: https://www.example.test\n"
            "domains:\n  example.test:\n    link_selector: '.teaser a'\n",
            encoding="utf-8",
        )
        s = load_settings(path)
        assert s.base_url == "https://www.example.test"
        assert s.link_selector == ".teaser a"

    def test_unknown_profile_setting_names_file_and_block(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text(
            "domains:\n  example.test:\n    link_selectr: '.teaser a'\n", encoding="utf-8",
        )
        with pytest.raises(ProfileError, match="link_selectr") as info:
            load_settings(path, base_url="https://example.test")
        assert info.value.source == str(path)
        assert "domains.example.test" in str(info.value)


class TestLoadProfile:
    def test_longest_domain_wins(self, profile_path):
        cfg = load_profile(profile_path, "https://news.example.test/")
        assert cfg["link_selector"] == ".latest a"

    def test_subdomain_matches_parent(self, profile_path):
        cfg = load_profile(profile_path, "https://www.example.test/")
        assert cfg["link_selector"] == ".teaser a"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_profile(path, "https://yle.fi") == {}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_profile(path, "https://yle.fi")

    def test_unknown_top_level_key_rejected(self, tmp_path):
        path = tmp_path / "top.yaml"
        path.write_text("defaults:\n  strict: true\n", encoding="utf-8")
        with pytest.raises(ProfileError, match="defaults"):
            load_profile(path, "https://yle.fi")

    def test_domains_must_be_mapping(self, tmp_path):
        path = tmp_path / "domains.yaml"
        path.write_text("domains:\n  - yle.fi\n", encoding="utf-8")
        with pytest.raises(ProfileError, match="'domains'"):
            load_profile(path, "https://yle.fi")

    def test_block_must_be_mapping(self, tmp_path):
        path = tmp_path / "block.yaml"
        path.write_text("domains:\n  yle.fi: fast\n", encoding="utf-8")
        with pytest.raises(ProfileError, match="domains.yle.fi"):
            load_profile(path, "https://yle.fi")

    def test_allowed_keys_checked_only_when_given(self, tmp_path):
        path = tmp_path / "free.yaml"
        path.write_text("default:\n  anything: 1\n", encoding="utf-8")
        assert load_profile(path, "https://yle.fi") == {"anything": 1}
        with pytest.raises(ProfileError, match="anything"):
            load_profile(path, "https://yle.fi", allowed_keys={"strict"})

    def test_domain_keys_case_insensitive(self, tmp_path):
        path = tmp_path / "case.yaml"
        path.write_text("domains:\n  Yle.FI:\n    strict: true\n", encoding="utf-8")
        assert load_profile(path, "https://WWW.yle.fi/uutiset") == {"strict": True}

    def test_unmatched_host_gets_default_only(self, profile_path):
        profile = SiteProfile.from_file(profile_path)
        assert profile.match("https://other.test/") is None
        assert profile.settings_for("https://other.test/") == {
            "strict": True,
            "ready_timeout_ms": 5000,
        }


class TestDomainMatches:
    @pytest.mark.parametrize(
        ("host", "domain", "expected"),
        [
            ("yle.fi", "yle.fi", True),
            ("www.yle.fi", "yle.fi", True),
            ("notyle.fi", "yle.fi", False),
            ("yle.fi", "www.yle.fi", False),
            ("yle.fi", "", False),
        ],
    )
    def test_matching(self, host, domain, expected):
        assert domain_matches(host, domain) is expected
