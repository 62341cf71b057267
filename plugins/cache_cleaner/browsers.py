"""
browsers.py
-----------

Cache folder locations of the supported browsers (Windows layout).

    Chrome   %LOCALAPPDATA%/Google/Chrome/User Data/Default/Cache
    Edge     %LOCALAPPDATA%/Microsoft/Edge/User Data/Default/Cache
    Firefox  %APPDATA%/Mozilla/Firefox/Profiles/<profile>/cache2

For Firefox the first profile directory (in name order) that contains a
``cache2`` folder wins.
"""

import os

BROWSERS = ("Firefox", "Chrome", "Edge")

_CHROMIUM_LAYOUT = {
    "Chrome": ("Google", "Chrome", "User Data", "Default", "Cache"),
    "Edge": ("Microsoft", "Edge", "User Data", "Default", "Cache"),
}


def canonical_browser(name):
    """Map a case-insensitive browser name onto BROWSERS."""
    for browser in BROWSERS:
        if str(name).strip().lower() == browser.lower():
            return browser
    raise ValueError(f"Unsupported browser: {name!r} (choose from {', '.join(BROWSERS)})")


def _firefox_cache(environ):
    app_data = environ.get("APPDATA")
    if not app_data:
        return None

    profiles_dir = os.path.join(app_data, "Mozilla", "Firefox", "Profiles")
    if not os.path.isdir(profiles_dir):
        return None

    for entry in sorted(os.listdir(profiles_dir)):
        profile = os.path.join(profiles_dir, entry)
        cache2 = os.path.join(profile, "cache2")
        if os.path.isdir(profile) and os.path.isdir(cache2):
            return cache2
    return None


def expected_cache_path(browser, environ=None):
    """
    Where the browser keeps its cache, whether or not it exists.

    Returns None when the location cannot even be computed (environment
    variable unset, no Firefox profile with a cache).
    """
    environ = os.environ if environ is None else environ
    browser = canonical_browser(browser)

    if browser == "Firefox":
        return _firefox_cache(environ)

    local_app_data = environ.get("LOCALAPPDATA")
    if not local_app_data:
        return None
    return os.path.join(local_app_data, *_CHROMIUM_LAYOUT[browser])

