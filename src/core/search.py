"""Free-text message search - Pure functions.

This module decides whether a message is relevant to a search query.
A message matches when any of four independent checks passes:

- direct: a query token appears in the message body or author name
- semantic: query and message both mention the same intent
- location: the query asks about a place and the message has a location
- fuzzy: a query token and a body token are near-identical

No ranking is produced and no index is built; every call rescans.
All functions are pure with no side effects.
"""

import re
from dataclasses import dataclass

from src.core.message import Message


DEFAULT_FUZZY_THRESHOLD = 0.6

# Both words must be at least this long for a prefix to count
DEFAULT_MIN_PREFIX_LENGTH = 4


@dataclass(frozen=True)
class MatcherSettings:
    """Tunable constants for fuzzy matching.

    Attributes:
        fuzzy_threshold: Similarity a token pair must exceed to match
        min_prefix_length: Minimum length of both words for a prefix to count
    """
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    min_prefix_length: int = DEFAULT_MIN_PREFIX_LENGTH


@dataclass(frozen=True)
class IntentVocabulary:
    """Words and phrases that signal one intent.

    Attributes:
        keywords: Primary keywords
        synonyms: Single-word synonyms
        variations: Multi-word phrasings
    """
    keywords: tuple[str, ...]
    synonyms: tuple[str, ...]
    variations: tuple[str, ...]

    @property
    def terms(self) -> tuple[str, ...]:
        """All words and phrases, in table order."""
        return self.keywords + self.synonyms + self.variations


INTENTS: dict[str, IntentVocabulary] = {
    "rent": IntentVocabulary(
        keywords=("rent", "rental", "renting", "lease", "apartment", "flat", "room"),
        synonyms=("tenant", "landlord", "sublet", "housing", "accommodation", "roommate"),
        variations=("for rent", "to let", "looking for a place", "room available", "place to stay"),
    ),
    "sell": IntentVocabulary(
        keywords=("sell", "selling", "sale", "sold"),
        synonyms=("offer", "price", "cheap", "deal", "bargain"),
        variations=("for sale", "up for grabs", "best offer", "make an offer", "getting rid of"),
    ),
    "buy": IntentVocabulary(
        keywords=("buy", "buying", "purchase", "wanted"),
        synonyms=("shopping", "acquire", "order"),
        variations=("looking to buy", "want to buy", "in the market for", "will pay"),
    ),
    "job": IntentVocabulary(
        keywords=("job", "jobs", "work", "hiring", "career"),
        synonyms=("employment", "position", "vacancy", "gig", "freelance", "internship", "shift"),
        variations=("now hiring", "looking for work", "part time", "full time", "job opening"),
    ),
    "lost": IntentVocabulary(
        keywords=("lost", "missing", "lose"),
        synonyms=("misplaced", "dropped", "forgot", "gone"),
        variations=("have you seen", "can't find", "cannot find", "last seen", "went missing"),
    ),
    "found": IntentVocabulary(
        keywords=("found", "find", "finding"),
        synonyms=("discovered", "picked", "recovered", "unclaimed"),
        variations=("picked up", "came across", "is this yours", "turned in"),
    ),
    "advice": IntentVocabulary(
        keywords=("advice", "recommend", "recommendation", "suggest", "suggestion"),
        synonyms=("tips", "tip", "opinion", "review", "guidance"),
        variations=("any ideas", "what do you think", "where can i", "does anyone know", "best place"),
    ),
    "event": IntentVocabulary(
        keywords=("event", "party", "meetup", "concert", "festival"),
        synonyms=("gathering", "show", "celebration", "game", "match"),
        variations=("this weekend", "tonight", "come join", "free entry", "everyone welcome"),
    ),
    "help": IntentVocabulary(
        keywords=("help", "assist", "support", "urgent"),
        synonyms=("emergency", "needed", "volunteer", "favor"),
        variations=("need help", "can someone", "anyone able", "help me", "please help"),
    ),
}

LOCATION_PREPOSITIONS: tuple[str, ...] = (
    "near",
    "close",
    "around",
    "in",
    "at",
    "within",
    "by",
    "next to",
    "beside",
    "adjacent to",
)

_PUNCTUATION = ".,;:!?\"'()[]{}<>-_/\\*#@&"


def tokenize(text: str) -> list[str]:
    """Split text into lower-case tokens.

    Pure function. Tokens are whitespace-delimited with surrounding
    punctuation stripped; empty tokens are dropped.
    """
    tokens = []
    for raw in text.lower().split():
        token = raw.strip(_PUNCTUATION)
        if token:
            tokens.append(token)
    return tokens


def contains_phrase(text: str, phrase: str) -> bool:
    """Check for a whole word or phrase, case-insensitively.

    Pure function.
    """
    pattern = r"(?<!\w)" + r"\s+".join(re.escape(p) for p in phrase.lower().split()) + r"(?!\w)"
    return re.search(pattern, text.lower()) is not None


def detect_intents(text: str) -> set[str]:
    """Return the names of all intents mentioned in the text.

    Pure function.
    """
    return {
        name for name, vocabulary in INTENTS.items()
        if any(contains_phrase(text, term) for term in vocabulary.terms)
    }


def has_location_intent(query: str) -> bool:
    """Check whether a query uses a spatial preposition.

    Pure function.
    """
    return any(contains_phrase(query, word) for word in LOCATION_PREPOSITIONS)


def direct_match(query: str, message: Message) -> bool:
    """Any query token is a substring of the body or the author name.

    Pure function.
    """
    body = message.text.lower()
    author = message.author_name.lower()
    return any(token in body or token in author for token in tokenize(query))


def semantic_match(query: str, message: Message) -> bool:
    """Query and message body independently mention the same intent.

    Pure function.
    """
    query_intents = detect_intents(query)
    if not query_intents:
        return False
    return bool(query_intents & detect_intents(message.text))


def location_intent_match(query: str, message: Message) -> bool:
    """Query asks about a place and the message has a location.

    Pure function.
    """
    return message.location is not None and has_location_intent(query)


def _words_overlap(a: str, b: str, min_prefix_length: int) -> bool:
    if a in b or b in a:
        return True
    return (
        len(a) >= min_prefix_length
        and len(b) >= min_prefix_length
        and (a.startswith(b) or b.startswith(a))
    )


def word_similarity(
    words_a: list[str],
    words_b: list[str],
    min_prefix_length: int = DEFAULT_MIN_PREFIX_LENGTH,
) -> float:
    """Share of words that overlap between two word lists.

    Pure function.

    Two words overlap when one contains the other, or when one is a
    prefix of the other and both are at least min_prefix_length long.
    Sharing a stem is not enough: "interview" and "international" do
    not overlap.

    Args:
        words_a: First word list
        words_b: Second word list
        min_prefix_length: Minimum word length for the prefix rule

    Returns:
        |overlapping words of a| / max(len(a), len(b)), 0.0 if either is empty
    """
    if not words_a or not words_b:
        return 0.0

    overlapping = {
        a for a in words_a
        if any(_words_overlap(a, b, min_prefix_length) for b in words_b)
    }
    return len(overlapping) / max(len(words_a), len(words_b))


def fuzzy_match(
    query: str,
    message: Message,
    settings: MatcherSettings | None = None,
) -> bool:
    """Some query token is near-identical to some body token.

    Pure function.
    """
    settings = settings or MatcherSettings()
    body_tokens = tokenize(message.text)

    for query_token in tokenize(query):
        for body_token in body_tokens:
            similarity = word_similarity(
                [query_token],
                [body_token],
                settings.min_prefix_length,
            )
            if similarity > settings.fuzzy_threshold:
                return True
    return False


def matches_query(
    query: str,
    message: Message,
    settings: MatcherSettings | None = None,
) -> bool:
    """Check whether a message is relevant to a search query.

    Pure function. An empty or blank query matches every message.

    Args:
        query: Raw search text
        message: Message to test
        settings: Fuzzy matching constants

    Returns:
        True if any matching strategy accepts the message
    """
    if not query or not query.strip():
        return True

    return (
        direct_match(query, message)
        or semantic_match(query, message)
        or location_intent_match(query, message)
        or fuzzy_match(query, message, settings)
    )


def filter_messages(
    messages: list[Message],
    query: str,
    settings: MatcherSettings | None = None,
) -> list[Message]:
    """Filter messages to those relevant to the query.

    Pure function. Keeps the input order.
    """
    return [m for m in messages if matches_query(query, m, settings)]
