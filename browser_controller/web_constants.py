"""Shared constants for tab matching and navigation."""

# Keyword -> canonical base URL. Lookup is a case-insensitive substring test
# and the first hit wins, so more specific keywords must come first.
POPULAR_SITES: tuple[tuple[str, str], ...] = (
    ("youtube", "https://www.youtube.com"),
    ("gmail", "https://mail.google.com"),
    ("google drive", "https://drive.google.com"),
    ("google docs", "https://docs.google.com"),
    ("google maps", "https://maps.google.com"),
    ("google calendar", "https://calendar.google.com"),
    ("google", "https://www.google.com"),
    ("github", "https://github.com"),
    ("gitlab", "https://gitlab.com"),
    ("stack overflow", "https://stackoverflow.com"),
    ("stackoverflow", "https://stackoverflow.com"),
    ("twitter", "https://twitter.com"),
    ("facebook", "https://www.facebook.com"),
    ("instagram", "https://www.instagram.com"),
    ("linkedin", "https://www.linkedin.com"),
    ("reddit", "https://www.reddit.com"),
    ("amazon", "https://www.amazon.com"),
    ("netflix", "https://www.netflix.com"),
    ("wikipedia", "https://www.wikipedia.org"),
    ("spotify", "https://open.spotify.com"),
    ("slack", "https://app.slack.com"),
    ("notion", "https://www.notion.so"),
    ("figma", "https://www.figma.com"),
    ("chatgpt", "https://chat.openai.com"),
    ("outlook", "https://outlook.live.com"),
    ("yahoo", "https://www.yahoo.com"),
    ("bing", "https://www.bing.com"),
    ("twitch", "https://www.twitch.tv"),
    ("discord", "https://discord.com/app"),
    ("whatsapp", "https://web.whatsapp.com"),
)

DEFAULT_SEARCH_ENGINE_URL = "https://www.google.com/search?q={query}"

# Tab selection
MIN_TAB_SCORE = 30.0

# Fixed scores of the fuzzy decision list
SCORE_EXACT = 100.0
SCORE_PREFIX = 90.0
SCORE_SUBSTRING = 85.0
SCORE_ALL_WORDS = 70.0
SCORE_SOME_WORDS_BASE = 50.0
SCORE_SOME_WORDS_SPAN = 20.0
SCORE_CHARACTER_SPAN = 40.0
PHONETIC_ACCEPT_THRESHOLD = 80.0
PHONETIC_FALLBACK_WEIGHT = 0.5

MAX_URL_LENGTH = 2048
