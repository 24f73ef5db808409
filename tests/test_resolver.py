"""Unit and property-based tests for the intent resolver."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from ora.intents import (
    CONFIGURATION_KINDS,
    CollaborationAction,
    ConfigAction,
    ConfigCategory,
    FallbackAction,
    PaywallAction,
    ResolverState,
    TopicAction,
    UserTier,
    VideoTarget,
    VideoUploadAction,
    VideoUrlAction,
)
from ora.intents.resolver import PAYWALL_CONTEXT
from ora.intents.topics import FALLBACK_RESPONSE

GATED_COMMANDS = [
    "upload persona video 1",
    "set persona video 2 to https://cdn.example.com/p.mp4",
    "upload training video 3",
    "set training video 1 to https://cdn.example.com/t.mp4",
    "add video https://cdn.example.com/clip.mp4",
]


class TestScenarios:
    """End-to-end resolution scenarios."""

    def test_connect_news_to_cnn(self, resolver):
        """Test scenario: news configuration by alias."""
        action = resolver.resolve("connect news to CNN")
        assert isinstance(action, ConfigAction)
        assert action.category is ConfigCategory.NEWS
        assert action.record.name == "CNN"
        assert action.record.url == "https://www.cnn.com"
        assert "CNN" in action.text

    def test_legal_budget_hiring_consults_three_agents(self, resolver):
        """Test scenario: multi-agent triggers pick agents in roster order."""
        action = resolver.resolve("What about our legal budget for hiring?")
        assert isinstance(action, CollaborationAction)
        assert action.specialists == ("Legal Advisor", "Financial Analyst", "HR Strategist")
        assert action.context == "Multi-Agent"

    def test_hello_falls_back(self, resolver):
        """Test scenario: unmatched text gets the thinking reply."""
        action = resolver.resolve("hello")
        assert isinstance(action, FallbackAction)
        assert action.text == FALLBACK_RESPONSE
        assert action.context is None

    def test_free_tier_persona_upload_is_paywalled(self, resolver, free_state):
        """Test scenario: free tier cannot upload persona videos."""
        action = resolver.resolve("upload persona video 1", free_state)
        assert isinstance(action, PaywallAction)
        assert not isinstance(action, VideoUploadAction)
        assert action.feature == "persona_upload"
        assert action.context == PAYWALL_CONTEXT


class TestPriority:
    """Tests for the first-match priority chain."""

    def test_rule_order(self, resolver):
        """Test the visible rule order."""
        assert resolver.rule_names == (
            "news",
            "library",
            "video",
            "calendar",
            "subscriber_email",
            "enable_training_package",
            "persona_upload",
            "persona_url",
            "training_upload",
            "training_url",
            "custom_video",
            "leader_question",
            "agile_framework",
            "multi_agent",
            "keyword_topic",
            "fallback",
        )

    def test_configuration_beats_multi_agent(self, resolver):
        """Test that configuration wins over a collaboration trigger."""
        rule, action = resolver.explain("connect video to Zoom for the budget review")
        assert rule == "video"
        assert isinstance(action, ConfigAction)

    def test_leader_question_beats_keyword_topic(self, resolver):
        """Test the leader question rule ahead of topic keywords."""
        rule, action = resolver.explain("What question should a leader ask about training?")
        assert rule == "leader_question"
        assert action.context == "Leadership"

    def test_agile_beats_multi_agent(self, resolver):
        """Test the agile rule ahead of collaboration triggers."""
        rule, _ = resolver.explain("agile compliance")
        assert rule == "agile_framework"

    def test_multi_agent_beats_keyword_topic(self, resolver):
        """Test that compliance consults agents rather than the governance topic."""
        rule, action = resolver.explain("compliance")
        assert rule == "multi_agent"
        assert action.specialists == ("Legal Advisor",)

    def test_default_specialist(self, resolver):
        """Test the Data Scientist when no specialist keyword matches."""
        action = resolver.resolve("please collaborate on this")
        assert action.specialists == ("Data Scientist",)

    def test_keyword_topic(self, resolver):
        """Test that keyword topics carry their topic as context."""
        rule, action = resolver.explain("Tell me about wellness")
        assert rule == "keyword_topic"
        assert isinstance(action, TopicAction)
        assert action.topic == "Human Health & Fitness"
        assert action.context == "Human Health & Fitness"

    def test_unresolvable_command_falls_through(self, resolver):
        """Test that a malformed command never errors."""
        rule, _ = resolver.explain("connect news to nowhere")
        assert rule == "fallback"

    def test_explain_matches_resolve(self, resolver):
        """Test that explain and resolve agree."""
        text = "set subscriber email to ops@example.com"
        assert resolver.explain(text)[1] == resolver.resolve(text)


class TestGating:
    """Tests for premium gating."""

    @pytest.mark.parametrize("text", GATED_COMMANDS)
    def test_free_tier_gets_paywall(self, resolver, free_state, text):
        """Test that every gated command is paywalled for free users."""
        assert isinstance(resolver.resolve(text, free_state), PaywallAction)

    @pytest.mark.parametrize("text", GATED_COMMANDS)
    def test_premium_with_package_is_allowed(self, resolver, premium_state, text):
        """Test that gated commands go through for premium users with the package."""
        action = resolver.resolve(text, premium_state)
        assert not isinstance(action, PaywallAction)
        assert action.kind in CONFIGURATION_KINDS

    def test_training_follows_package_not_tier(self, resolver):
        """Test that training slots need the package even on premium."""
        state = ResolverState(tier=UserTier.PREMIUM, has_training_package=False)
        action = resolver.resolve("upload training video 1", state)
        assert isinstance(action, PaywallAction)
        assert action.feature == "training_upload"

    def test_package_without_premium_allows_training(self, resolver):
        """Test that the package alone unlocks training slots."""
        state = ResolverState(tier=UserTier.FREE, has_training_package=True)
        action = resolver.resolve("set training video 2 to https://x.example.com/v.mp4", state)
        assert isinstance(action, VideoUrlAction)
        assert action.target is VideoTarget.TRAINING
        assert action.slot == 1

    def test_missing_state_is_free(self, resolver):
        """Test that no state means the free tier."""
        assert isinstance(resolver.resolve("upload persona video 1"), PaywallAction)

    @pytest.mark.parametrize("tier", [t for t in UserTier if t is not UserTier.FREE])
    def test_every_paid_plan_is_allowed(self, resolver, tier):
        """Test that the checkout plan names unlock persona and custom videos."""
        state = ResolverState(tier=tier)
        assert isinstance(resolver.resolve("upload persona video 1", state), VideoUploadAction)
        action = resolver.resolve("add video https://cdn.example.com/clip.mp4", state)
        assert not isinstance(action, PaywallAction)

    def test_stored_plan_names_parse(self):
        """Test parsing the tier strings checkout writes."""
        assert UserTier.parse("team") is UserTier.TEAM
        assert UserTier.parse(" Solo ") is UserTier.SOLO
        assert UserTier.parse("platinum") is UserTier.FREE
        assert UserTier.parse(None) is UserTier.FREE
        assert UserTier.TEAM.is_paid
        assert not UserTier.FREE.is_paid

    @given(st.sampled_from(GATED_COMMANDS), st.booleans())
    def test_free_tier_never_configures_persona_or_custom(self, text, package):
        """Property test: free tier never gets persona or custom video actions."""
        from ora.intents import IntentResolver

        state = ResolverState(tier=UserTier.FREE, has_training_package=package)
        action = IntentResolver().resolve(text, state)
        if "training" not in text:
            assert isinstance(action, PaywallAction)


class TestTotality:
    """Property tests for the resolver as a whole."""

    @pytest.mark.parametrize("digits", ["9" * 5000, "0" * 40 + "2", "12", "000"])
    def test_oversized_or_zero_slot_falls_through(self, resolver, premium_state, digits):
        """Test that slot numbers outside the range never raise."""
        rule, action = resolver.explain(f"upload persona video {digits}", premium_state)
        if digits == "0" * 40 + "2":
            assert isinstance(action, VideoUploadAction)
            assert action.slot == 1
        else:
            assert rule != "persona_upload"
            assert not isinstance(action, VideoUploadAction)

    @given(st.text(max_size=80))
    def test_always_one_action(self, text: str):
        """Property test: every input resolves to exactly one action."""
        from ora.intents import IntentResolver

        rule, action = IntentResolver().explain(text)
        assert rule in IntentResolver().rule_names
        assert action.text

    @given(st.text(max_size=80))
    def test_resolution_is_pure(self, text: str):
        """Property test: the same input resolves the same way twice."""
        from ora.intents import IntentResolver

        resolver = IntentResolver()
        assert resolver.explain(text) == resolver.explain(text)
