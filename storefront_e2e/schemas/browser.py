from enum import StrEnum

_MOBILE_MARKERS = ("mobile", "android", "pixel")


class BrowserCategory(StrEnum):
    """Which pre-baked activation/reset users a browser project gets.

    Each project consumes its own keys so parallel runs across browsers never
    race for the same one-shot token.
    """

    DEFAULT = "default"
    FIREFOX = "firefox"
    MOBILE = "mobile"

    @classmethod
    def from_browser_name(cls, browser_name: str) -> "BrowserCategory":
        """Classify a browser or project name by case-insensitive substring.

        ``firefox`` is checked before the mobile markers; anything else,
        chromium and webkit included, is ``DEFAULT``.
        """
        name = browser_name.lower()
        if "firefox" in name:
            return cls.FIREFOX
        if any(marker in name for marker in _MOBILE_MARKERS):
            return cls.MOBILE
        return cls.DEFAULT
