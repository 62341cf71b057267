import os

import pytest

from plugins.cache_cleaner.browsers import canonical_browser, expected_cache_path


def test_canonical_browser_is_case_insensitive():
    assert canonical_browser("firefox") == "Firefox"
    assert canonical_browser(" EDGE ") == "Edge"
    with pytest.raises(ValueError):
        canonical_browser("Opera")


def test_chromium_paths_follow_local_app_data(tmp_path):
    env = {"LOCALAPPDATA": str(tmp_path)}
    assert expected_cache_path("Chrome", env) == os.path.join(
        str(tmp_path), "Google", "Chrome", "User Data", "Default", "Cache"
    )
    assert expected_cache_path("Edge", env) == os.path.join(
        str(tmp_path), "Microsoft", "Edge", "User Data", "Default", "Cache"
    )


def test_missing_environment_variable_means_unknown_location():
    assert expected_cache_path("Chrome", {}) is None
    assert expected_cache_path("Firefox", {}) is None


def test_firefox_picks_first_profile_with_cache2(tmp_path):
    profiles = tmp_path / "Mozilla" / "Firefox" / "Profiles"
    (profiles / "a.default").mkdir(parents=True)
    (profiles / "b.release" / "cache2").mkdir(parents=True)
    (profiles / "c.other" / "cache2").mkdir(parents=True)
    (profiles / "plain-file").write_text("x", encoding="utf-8")

    found = expected_cache_path("Firefox", {"APPDATA": str(tmp_path)})

    assert found == str(profiles / "b.release" / "cache2")


def test_firefox_without_cache2_profile_is_not_found(tmp_path):
    (tmp_path / "Mozilla" / "Firefox" / "Profiles" / "x.default").mkdir(parents=True)
    assert expected_cache_path("Firefox", {"APPDATA": str(tmp_path)}) is None

