"""Unit and property-based tests for the pattern library."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from ora.intents import PatternCategory, PatternLibrary
from ora.intents.patterns import (
    NEWS_SOURCES,
    is_video_url,
    resolve_news_source,
    resolve_service,
)


class TestServicePatterns:
    """Tests for news, library, video and calendar extraction."""

    @pytest.fixture
    def library(self):
        return PatternLibrary()

    def test_news_alias_lookup(self, library):
        """Test that a known outlet resolves to its canonical URL."""
        extracted = library.match(PatternCategory.NEWS, "connect news to CNN")
        assert extracted is not None
        assert extracted.record.name == "CNN"
        assert extracted.record.url == "https://www.cnn.com"

    def test_news_alias_is_case_insensitive(self, library):
        """Test that outlet names match regardless of case."""
        extracted = library.match(PatternCategory.NEWS, "set news source to the VERGE")
        assert extracted.record.url == "https://www.theverge.com"

    def test_news_url_used_verbatim(self, library):
        """Test that a captured URL is stored unchanged."""
        url = "https://example.com/feed"
        extracted = library.match(PatternCategory.NEWS, f"link news with {url}")
        assert extracted.record.url == url
        assert extracted.record.name == url

    def test_unknown_news_name_does_not_match(self, library):
        """Test that an unknown outlet without a URL is not a command."""
        assert library.match(PatternCategory.NEWS, "connect news to my cousin") is None

    def test_requires_verb_phrase(self, library):
        """Test that a bare service name is not a command."""
        assert library.match(PatternCategory.NEWS, "CNN") is None
        assert library.match(PatternCategory.VIDEO, "I like zoom") is None

    def test_library_alias(self, library):
        """Test document library aliases."""
        extracted = library.match(PatternCategory.LIBRARY, "connect library to SharePoint")
        assert extracted.record.name == "SharePoint"

    def test_library_custom_url_label(self, library):
        """Test that an unrecognised library URL gets the custom label."""
        extracted = library.match(
            PatternCategory.LIBRARY, "set library to https://docs.example.org"
        )
        assert extracted.record.name == "Custom Library"
        assert extracted.record.url == "https://docs.example.org"

    def test_alias_keeps_given_url(self, library):
        """Test that a URL mentioning a known service keeps the given URL."""
        url = "https://zoom.us/j/12345"
        extracted = library.match(PatternCategory.VIDEO, f"connect video to {url}")
        assert extracted.record.name == "Zoom"
        assert extracted.record.url == url

    def test_facetime_ignores_url(self, library):
        """Test that FaceTime always uses its scheme URL."""
        extracted = library.match(PatternCategory.VIDEO, "connect video to facetime")
        assert extracted.record.url == "facetime://"

    def test_google_calendar_needs_calendar_word(self):
        """Test that "google" alone is not a calendar."""
        assert resolve_service(PatternCategory.CALENDAR, "google") is None
        record = resolve_service(PatternCategory.CALENDAR, "Google Calendar")
        assert record.name == "Google Calendar"

    def test_calendar_pattern(self, library):
        """Test the calendar rule."""
        extracted = library.match(PatternCategory.CALENDAR, "connect calendar to Outlook")
        assert extracted.record.name == "Outlook Calendar"

    @given(st.sampled_from(sorted(NEWS_SOURCES)))
    def test_every_news_alias_resolves(self, name: str):
        """Property test: every alias resolves in any letter case."""
        record = resolve_news_source(name.upper())
        assert record is not None
        assert record.url == NEWS_SOURCES[name]

    @given(st.text(alphabet="abcdefghijklmnopqrstuvwxyz./-", min_size=1, max_size=30))
    def test_url_captures_are_verbatim(self, path: str):
        """Property test: any http(s) capture is kept exactly."""
        url = f"https://{path}"
        record = resolve_news_source(url)
        assert record is not None
        assert record.url == url


class TestAccountPatterns:
    """Tests for email, training package and slot extraction."""

    @pytest.fixture
    def library(self):
        return PatternLibrary()

    def test_subscriber_email(self, library):
        """Test that the email address is captured."""
        extracted = library.match(
            PatternCategory.SUBSCRIBER_EMAIL, "set subscriber email to ops@example.com"
        )
        assert extracted.value == "ops@example.com"

    def test_send_reports_to(self, library):
        """Test the alternate reports phrasing."""
        extracted = library.match(PatternCategory.SUBSCRIBER_EMAIL, "send reports to a.b@x.io")
        assert extracted.value == "a.b@x.io"

    def test_training_package_phrases(self, library):
        """Test the training package activation phrases."""
        for text in ("enable training package", "Buy Training Package", "upgrade my training"):
            assert library.match(PatternCategory.TRAINING_PACKAGE, text) is not None

    def test_slots_are_zero_based(self, library):
        """Test that slot numbers are converted to list indexes."""
        extracted = library.match(PatternCategory.PERSONA_UPLOAD, "upload persona video 2")
        assert extracted.slot == 1

    def test_persona_slot_out_of_range(self, library):
        """Test that persona slots stop at 3."""
        assert library.match(PatternCategory.PERSONA_UPLOAD, "upload persona video 4") is None
        assert library.match(PatternCategory.PERSONA_UPLOAD, "upload persona video 0") is None

    def test_training_slots_go_to_six(self, library):
        """Test that training slots allow 1-6."""
        assert library.match(PatternCategory.TRAINING_UPLOAD, "upload training video 6").slot == 5
        assert library.match(PatternCategory.TRAINING_UPLOAD, "upload training video 7") is None

    def test_persona_url(self, library):
        """Test that the slot and URL are both captured."""
        extracted = library.match(
            PatternCategory.PERSONA_URL,
            "set persona video 1 to https://cdn.example.com/intro.mp4",
        )
        assert extracted.slot == 0
        assert extracted.value == "https://cdn.example.com/intro.mp4"

    def test_custom_video_requires_video_url(self, library):
        """Test that non-video URLs are not added to the library."""
        assert library.match(
            PatternCategory.CUSTOM_VIDEO, "add video https://example.com/page"
        ) is None
        extracted = library.match(
            PatternCategory.CUSTOM_VIDEO, "add video https://example.com/clip.mp4"
        )
        assert extracted.value == "https://example.com/clip.mp4"

    def test_is_video_url(self):
        """Test video URL detection."""
        assert is_video_url("https://example.com/a.webm?x=1")
        assert is_video_url("https://project.supabase.co/storage/file")
        assert not is_video_url("https://example.com/a.pdf")
