"""Pattern library for chat configuration commands.

Hidden design decisions:
- The regular expressions that recognise each command, in priority order
- The alias tables that turn a spoken service name into a canonical URL
- How a captured value is validated (URL passthrough, slot ranges, file types)

Every rule anchors on a verb phrase ("connect news to X", "set persona video 1
to URL"). Within a category the first rule that matches *and* yields a usable
value wins; a rule whose capture cannot be resolved lets the next rule try.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

from .models import ConfigCategory, ConfigurationRecord, VideoTarget


class PatternCategory(str, Enum):
    """Categories of configuration command, one rule list each."""

    NEWS = "news"
    LIBRARY = "library"
    VIDEO = "video"
    CALENDAR = "calendar"
    SUBSCRIBER_EMAIL = "subscriber_email"
    TRAINING_PACKAGE = "training_package"
    PERSONA_UPLOAD = "persona_upload"
    PERSONA_URL = "persona_url"
    TRAINING_UPLOAD = "training_upload"
    TRAINING_URL = "training_url"
    CUSTOM_VIDEO = "custom_video"


@dataclass(frozen=True)
class PatternRule:
    """A single extraction rule."""

    category: PatternCategory
    pattern: re.Pattern[str]

    def search(self, text: str) -> re.Match[str] | None:
        return self.pattern.search(text)


@dataclass(frozen=True)
class ServiceAlias:
    """A known service recognised by keyword.

    ``keywords`` match if any is contained in the lowercased value;
    ``requires`` must all be contained as well.
    """

    name: str
    url: str
    keywords: tuple[str, ...]
    requires: tuple[str, ...] = ()
    url_passthrough: bool = True

    def matches(self, value_lower: str) -> bool:
        return (
            any(k in value_lower for k in self.keywords)
            and all(r in value_lower for r in self.requires)
        )


class ExtractedValue(BaseModel):
    """What a matching rule extracted from the message."""

    model_config = ConfigDict(frozen=True)

    category: PatternCategory
    rule: str
    value: str = ""
    slot: int | None = None
    record: ConfigurationRecord | None = None


def is_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


# News outlets are looked up by exact (case-insensitive) name.
NEWS_SOURCES: dict[str, str] = {
    "techcrunch": "https://techcrunch.com",
    "tech crunch": "https://techcrunch.com",
    "the verge": "https://www.theverge.com",
    "verge": "https://www.theverge.com",
    "wired": "https://www.wired.com",
    "cnn": "https://www.cnn.com",
    "bbc": "https://www.bbc.com/news",
    "reuters": "https://www.reuters.com",
    "associated press": "https://apnews.com",
    "ap news": "https://apnews.com",
    "new york times": "https://www.nytimes.com",
    "nyt": "https://www.nytimes.com",
    "washington post": "https://www.washingtonpost.com",
    "wall street journal": "https://www.wsj.com",
    "wsj": "https://www.wsj.com",
    "fox news": "https://www.foxnews.com",
    "msnbc": "https://www.msnbc.com",
    "npr": "https://www.npr.org",
    "bloomberg": "https://www.bloomberg.com",
    "financial times": "https://www.ft.com",
    "ft": "https://www.ft.com",
    "the guardian": "https://www.theguardian.com",
    "guardian": "https://www.theguardian.com",
    "forbes": "https://www.forbes.com",
    "business insider": "https://www.businessinsider.com",
    "axios": "https://www.axios.com",
    "politico": "https://www.politico.com",
    "mit technology review": "https://www.technologyreview.com",
    "mit tech review": "https://www.technologyreview.com",
    "ars technica": "https://arstechnica.com",
    "engadget": "https://www.engadget.com",
    "cnet": "https://www.cnet.com",
    "zdnet": "https://www.zdnet.com",
}

# Document libraries, video services and calendars are recognised by keyword,
# first alias wins.
SERVICE_ALIASES: dict[PatternCategory, tuple[ServiceAlias, ...]] = {
    PatternCategory.LIBRARY: (
        ServiceAlias("SharePoint", "https://www.office.com/launch/sharepoint", ("sharepoint",)),
        ServiceAlias("OneDrive", "https://onedrive.live.com", ("onedrive", "one drive")),
        ServiceAlias("Google Drive", "https://drive.google.com", ("google drive", "drive.google")),
        ServiceAlias(
            "Microsoft 365", "https://www.office.com", ("microsoft 365", "office 365", "m365")
        ),
        ServiceAlias("Salesforce", "https://login.salesforce.com", ("salesforce",)),
    ),
    PatternCategory.VIDEO: (
        ServiceAlias("Microsoft Teams", "https://teams.microsoft.com", ("teams",)),
        ServiceAlias("FaceTime", "facetime://", ("facetime",), url_passthrough=False),
        ServiceAlias("Zoom", "https://zoom.us", ("zoom",)),
        ServiceAlias("Google Meet", "https://meet.google.com", ("google meet", "meet")),
        ServiceAlias("Webex", "https://www.webex.com", ("webex",)),
    ),
    PatternCategory.CALENDAR: (
        ServiceAlias("Calendly", "https://calendly.com", ("calendly",)),
        ServiceAlias(
            "Google Calendar", "https://calendar.google.com", ("google",), requires=("calendar",)
        ),
        ServiceAlias("Outlook Calendar", "https://outlook.live.com/calendar", ("outlook",)),
        ServiceAlias(
            "Microsoft Calendar",
            "https://outlook.office365.com/calendar",
            ("microsoft", "office 365"),
        ),
    ),
}

CUSTOM_SERVICE_LABELS: dict[PatternCategory, str] = {
    PatternCategory.LIBRARY: "Custom Library",
    PatternCategory.VIDEO: "Custom Video Service",
    PatternCategory.CALENDAR: "Custom Calendar",
}

_EMAIL = r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"
_VIDEO_FILE_URL = r"(https?://[^\s]+\.(?:mp4|mov|avi|webm|m4v)[^\s]*)"
_VIDEO_EXTENSION = re.compile(r"\.(mp4|mov|avi|webm|m4v)(\?.*)?$", re.IGNORECASE)


def _rules(category: PatternCategory, *patterns: str) -> tuple[PatternRule, ...]:
    return tuple(PatternRule(category, re.compile(p, re.IGNORECASE)) for p in patterns)


DEFAULT_RULES: dict[PatternCategory, tuple[PatternRule, ...]] = {
    PatternCategory.NEWS: _rules(
        PatternCategory.NEWS,
        r"connect\s+news\s+(?:to|with)\s+(.+)",
        r"set\s+news\s+source\s+to\s+(.+)",
        r"configure\s+news\s+(?:to|with)\s+(.+)",
        r"link\s+news\s+(?:to|with)\s+(.+)",
    ),
    PatternCategory.LIBRARY: _rules(
        PatternCategory.LIBRARY,
        r"connect\s+library\s+(?:to|with)\s+(.+)",
        r"set\s+library\s+(?:to|with)\s+(.+)",
        r"configure\s+library\s+(?:to|with)\s+(.+)",
        r"link\s+library\s+(?:to|with)\s+(.+)",
    ),
    PatternCategory.VIDEO: _rules(
        PatternCategory.VIDEO,
        r"connect\s+video\s+(?:to|with)\s+(.+)",
        r"set\s+video\s+(?:to|with)\s+(.+)",
        r"configure\s+video\s+(?:to|with)\s+(.+)",
        r"link\s+video\s+(?:to|with)\s+(.+)",
    ),
    PatternCategory.CALENDAR: _rules(
        PatternCategory.CALENDAR,
        r"connect\s+calendar\s+to\s+(.+)",
    ),
    PatternCategory.SUBSCRIBER_EMAIL: _rules(
        PatternCategory.SUBSCRIBER_EMAIL,
        rf"(?:set|configure|update)\s+(?:subscriber\s+)?email\s+(?:to\s+)?{_EMAIL}",
        rf"(?:set|configure|update)\s+(?:report|reports)\s+email\s+(?:to\s+)?{_EMAIL}",
        rf"(?:send\s+reports?\s+to\s+){_EMAIL}",
    ),
    PatternCategory.TRAINING_PACKAGE: _rules(
        PatternCategory.TRAINING_PACKAGE,
        r"enable\s+training\s+package",
        r"activate\s+training\s+package",
        r"buy\s+training\s+package",
        r"purchase\s+training\s+package",
        r"get\s+training\s+package",
        r"upgrade.*training",
    ),
    PatternCategory.PERSONA_UPLOAD: _rules(
        PatternCategory.PERSONA_UPLOAD,
        r"upload\s+persona\s+video\s+(\d+)",
        r"upload\s+local\s+video\s+(?:to\s+)?(?:persona\s+)?(\d+)",
        r"add\s+local\s+(?:video\s+)?(?:to\s+)?persona\s+(\d+)",
        r"set\s+persona\s+(\d+)\s+(?:from\s+)?(?:local\s+)?file",
    ),
    PatternCategory.PERSONA_URL: _rules(
        PatternCategory.PERSONA_URL,
        r"set\s+persona\s+video\s+(\d+)\s+(?:to|link)\s+(https?://[^\s]+)",
        r"persona\s+video\s+(\d+)\s+(?:is|=)\s+(https?://[^\s]+)",
        r"configure\s+persona\s+(\d+)\s+(?:video|link)\s+(https?://[^\s]+)",
    ),
    PatternCategory.TRAINING_UPLOAD: _rules(
        PatternCategory.TRAINING_UPLOAD,
        r"upload\s+training\s+video\s+(\d+)",
        r"upload\s+local\s+video\s+(?:to\s+)?(?:training\s+)?(\d+)",
        r"add\s+local\s+(?:video\s+)?(?:to\s+)?training\s+(\d+)",
        r"set\s+training\s+(\d+)\s+(?:from\s+)?(?:local\s+)?file",
    ),
    PatternCategory.TRAINING_URL: _rules(
        PatternCategory.TRAINING_URL,
        r"set\s+training\s+video\s+(\d+)\s+(?:to|link)\s+(https?://[^\s]+)",
        r"training\s+video\s+(\d+)\s+(?:is|=)\s+(https?://[^\s]+)",
        r"configure\s+training\s+(\d+)\s+(?:video|link)\s+(https?://[^\s]+)",
    ),
    PatternCategory.CUSTOM_VIDEO: _rules(
        PatternCategory.CUSTOM_VIDEO,
        rf"add\s+video\s+(?:content\s+)?(?:url\s+)?{_VIDEO_FILE_URL}",
        rf"include\s+video\s+{_VIDEO_FILE_URL}",
        rf"upload\s+video\s+{_VIDEO_FILE_URL}",
        r"add\s+(?:this\s+)?video\s+(https?://[^\s]+)",
    ),
}

SERVICE_CATEGORIES: dict[PatternCategory, ConfigCategory] = {
    PatternCategory.NEWS: ConfigCategory.NEWS,
    PatternCategory.LIBRARY: ConfigCategory.LIBRARY,
    PatternCategory.VIDEO: ConfigCategory.VIDEO,
    PatternCategory.CALENDAR: ConfigCategory.CALENDAR,
}

SLOT_TARGETS: dict[PatternCategory, VideoTarget] = {
    PatternCategory.PERSONA_UPLOAD: VideoTarget.PERSONA,
    PatternCategory.PERSONA_URL: VideoTarget.PERSONA,
    PatternCategory.TRAINING_UPLOAD: VideoTarget.TRAINING,
    PatternCategory.TRAINING_URL: VideoTarget.TRAINING,
}


def resolve_news_source(value: str) -> ConfigurationRecord | None:
    """Resolve a captured news outlet name or URL."""
    url = NEWS_SOURCES.get(value.lower())
    if url:
        return ConfigurationRecord(name=value, url=url)
    if is_url(value):
        return ConfigurationRecord(name=value, url=value)
    return None


def resolve_service(category: PatternCategory, value: str) -> ConfigurationRecord | None:
    """Resolve a captured library, video or calendar service name or URL."""
    value_lower = value.lower()
    for alias in SERVICE_ALIASES[category]:
        if alias.matches(value_lower):
            url = value if alias.url_passthrough and is_url(value) else alias.url
            return ConfigurationRecord(name=alias.name, url=url)
    if is_url(value):
        return ConfigurationRecord(name=CUSTOM_SERVICE_LABELS[category], url=value)
    return None


def is_video_url(url: str) -> bool:
    return bool(_VIDEO_EXTENSION.search(url)) or "supabase.co" in url or "video" in url


class PatternLibrary:
    """Ordered extraction rules per category.

    Example:
        >>> library = PatternLibrary()
        >>> library.match(PatternCategory.NEWS, "connect news to CNN").record.url
        'https://www.cnn.com'
    """

    def __init__(self, rules: dict[PatternCategory, tuple[PatternRule, ...]] | None = None):
        self._rules = dict(DEFAULT_RULES if rules is None else rules)
        self._extractors: dict[
            PatternCategory, Callable[[PatternCategory, re.Match[str]], ExtractedValue | None]
        ] = {
            PatternCategory.NEWS: self._extract_service,
            PatternCategory.LIBRARY: self._extract_service,
            PatternCategory.VIDEO: self._extract_service,
            PatternCategory.CALENDAR: self._extract_service,
            PatternCategory.SUBSCRIBER_EMAIL: self._extract_text,
            PatternCategory.TRAINING_PACKAGE: self._extract_flag,
            PatternCategory.PERSONA_UPLOAD: self._extract_slot,
            PatternCategory.PERSONA_URL: self._extract_slot,
            PatternCategory.TRAINING_UPLOAD: self._extract_slot,
            PatternCategory.TRAINING_URL: self._extract_slot,
            PatternCategory.CUSTOM_VIDEO: self._extract_video_url,
        }

    def rules(self, category: PatternCategory) -> tuple[PatternRule, ...]:
        return self._rules.get(category, ())

    def match(self, category: PatternCategory, text: str) -> ExtractedValue | None:
        """Return the value extracted by the first usable rule, or None."""
        extract = self._extractors[category]
        for rule in self.rules(category):
            found = rule.search(text)
            if found is None:
                continue
            extracted = extract(category, found)
            if extracted is not None:
                return extracted
        return None

    @staticmethod
    def _extract_service(category: PatternCategory, found: re.Match[str]) -> ExtractedValue | None:
        value = found.group(1).strip()
        if category is PatternCategory.NEWS:
            record = resolve_news_source(value)
        else:
            record = resolve_service(category, value)
        if record is None:
            return None
        return ExtractedValue(
            category=category, rule=found.re.pattern, value=value, record=record
        )

    @staticmethod
    def _extract_text(category: PatternCategory, found: re.Match[str]) -> ExtractedValue:
        return ExtractedValue(category=category, rule=found.re.pattern, value=found.group(1).strip())

    @staticmethod
    def _extract_flag(category: PatternCategory, found: re.Match[str]) -> ExtractedValue:
        return ExtractedValue(category=category, rule=found.re.pattern, value=found.group(0))

    @staticmethod
    def _extract_slot(category: PatternCategory, found: re.Match[str]) -> ExtractedValue | None:
        digits = found.group(1).lstrip("0")
        # More than two significant digits is always out of range
        if not digits or len(digits) > 2:
            return None
        slot = int(digits)
        if not 1 <= slot <= SLOT_TARGETS[category].slot_count:
            return None
        value = found.group(2).strip() if found.re.groups >= 2 else ""
        return ExtractedValue(
            category=category, rule=found.re.pattern, value=value, slot=slot - 1
        )

    @staticmethod
    def _extract_video_url(category: PatternCategory, found: re.Match[str]) -> ExtractedValue | None:
        url = found.group(1).strip()
        if not is_video_url(url):
            return None
        return ExtractedValue(category=category, rule=found.re.pattern, value=url)
