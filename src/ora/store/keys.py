"""Names of the persisted keys.

The names are part of the on-disk format: they match the keys the web panel
keeps in browser local storage, so exported state can be moved between the two.
"""


class StoreKey:
    """Key constants for the key/value store."""

    CONVERSATION_LOGS = "conversationLogs"
    AGENT_QUESTION_LOGS = "agentQuestionLogs"
    CONFIGURED_NEWS_SOURCE = "configuredNewsSource"
    CONFIGURED_LIBRARY = "configuredLibrary"
    CONFIGURED_VIDEO = "configuredVideo"
    CONFIGURED_CALENDAR = "configuredCalendar"
    SUBSCRIBER_EMAIL = "subscriberEmail"
    PERSONA_VIDEO_URLS = "personaVideoUrls"
    CUSTOM_VIDEO_URLS = "customVideoUrls"
    TRAINING_VIDEO_URLS = "trainingVideoUrls"
    HAS_TRAINING_PACKAGE = "hasTrainingPackage"
    USER_TIER = "userTier"
    USER_STATUS = "userStatus"
    FEEDBACK_LOGS = "feedbackLogs"
    ISSUE_REPORTS = "issueReports"

    DATA_CONSENT = "dataConsent"
    USER_AGREEMENT_ACCEPTED = "userAgreementAccepted"
    USER_QUESTION_COUNT = "userQuestionCount"
    LAST_PLAYED_VIDEO = "lastPlayedVideo"
    LAST_PLAYED_TRAINING_INDEX = "lastPlayedTrainingIndex"

    @classmethod
    def all(cls) -> list[str]:
        """Every declared key, in declaration order."""
        return [
            value for name, value in vars(cls).items()
            if name.isupper() and isinstance(value, str)
        ]
