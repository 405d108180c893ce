"""
Headline Engine — Deterministic Rule-Based Classifier

Classifies a news headline as "fake" or "trustworthy" and explains why.

The engine defines:
  1. The rule table (five immutable phrase categories)
  2. Structural signals (exclamation marks, ALL-CAPS words, length)
  3. Additive scoring into a fake score and a trust score
  4. The decision thresholds and confidence arithmetic

Nothing here learns or drifts. The same headline always produces the
same result, and the rule table cannot be changed at runtime. Changing
a phrase, a weight, or a threshold requires a new ENGINE_VERSION.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --- Engine Version (stamped on every API response) ---
ENGINE_VERSION = "1.0.0"

LABEL_FAKE = "fake"
LABEL_TRUSTWORTHY = "trustworthy"

TARGET_FAKE = "fake"
TARGET_TRUST = "trust"


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class RuleCategory:
    """
    A named group of trigger phrases sharing one weight and one
    explanation sentence. Fires at most once per headline, no matter
    how many of its phrases match.
    """
    id: str
    name: str
    phrases: tuple[str, ...]   # Lower-case; matched as plain substrings
    weight: int
    target: str                # TARGET_FAKE or TARGET_TRUST
    explanation: str

    def matches(self, text_lower: str) -> bool:
        return any(phrase in text_lower for phrase in self.phrases)


@dataclass
class ScoreState:
    """Per-call accumulator. Created fresh for every headline."""
    fake_score: int = 0
    trust_score: int = 0
    reasons: list[str] = field(default_factory=list)

    @property
    def final_score(self) -> int:
        return self.fake_score - self.trust_score

    def add(self, target: str, weight: int, reason: str | None = None) -> None:
        if target == TARGET_TRUST:
            self.trust_score += weight
        else:
            self.fake_score += weight
        if reason:
            self.reasons.append(reason)

    def to_dict(self) -> dict:
        return {
            "fake_score": self.fake_score,
            "trust_score": self.trust_score,
            "final_score": self.final_score,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class DetectionResult:
    """Result of classifying one headline."""
    label: str          # "fake" or "trustworthy"
    confidence: int     # 0 to 95
    explanation: str

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "confidence": self.confidence,
            "explanation": self.explanation,
        }


# ============================================================
# RULE TABLE (Immutable)
# ============================================================

RULE_CATEGORIES: tuple[RuleCategory, ...] = (
    RuleCategory(
        id="IMPOSSIBLE_CLAIMS",
        name="Impossible Claims",
        phrases=(
            "immortal",
            "immortality",
            "live forever",
            "time travel",
            "teleportation",
            "reverse aging",
            "invincible",
            "cure cancer",
            "cures all diseases",
            "brings dead back",
        ),
        weight=5,
        target=TARGET_FAKE,
        explanation="The headline includes impossible or pseudoscientific claims.",
    ),
    RuleCategory(
        id="STRONG_CLICKBAIT",
        name="Strong Clickbait",
        phrases=(
            "you won't believe",
            "this will change your life",
            "shocking",
            "explosive",
            "mind-blowing",
            "unbelievable",
            "goes viral",
            "hidden truth",
            "top secret",
        ),
        weight=4,
        target=TARGET_FAKE,
        explanation="The headline uses strong clickbait expressions.",
    ),
    RuleCategory(
        id="SENSATIONAL_WORDS",
        name="Sensational Wording",
        phrases=(
            "miracle",
            "outrageous",
            "insane",
            "jaw-dropping",
            "scandal",
            "exposed",
        ),
        weight=3,
        target=TARGET_FAKE,
        explanation="The wording is sensational or emotionally exaggerated.",
    ),
    RuleCategory(
        id="ABSOLUTE_LANGUAGE",
        name="Absolute Language",
        phrases=(
            "always",
            "never",
            "everyone",
            "no one",
            "proves once and for all",
        ),
        weight=2,
        target=TARGET_FAKE,
        explanation="Contains absolute language often found in misleading content.",
    ),
    RuleCategory(
        id="TRUSTWORTHY_CUES",
        name="Trustworthy Source Cues",
        phrases=(
            "study",
            "research",
            "published in",
            "university",
            "according to",
            "scientists at",
            "researchers at",
            "official data",
            "peer-reviewed",
            "in a journal",
        ),
        weight=4,
        target=TARGET_TRUST,
        explanation="References research, studies, or official sources.",
    ),
)

# --- Structural signals ---
MULTI_EXCLAMATION_WEIGHT = 3
MULTI_EXCLAMATION_REASON = "Multiple exclamation marks indicate exaggeration."
SINGLE_EXCLAMATION_WEIGHT = 1
SINGLE_EXCLAMATION_REASON = "Exclamation mark suggests emotional emphasis."

ALL_CAPS_MIN_LENGTH = 4
ALL_CAPS_MIN_WORDS = 2
ALL_CAPS_WEIGHT = 3
ALL_CAPS_REASON = "Contains ALL-CAPS words often used in fake headlines."

LONG_HEADLINE_WORDS = 14    # More than this leans credible
SHORT_HEADLINE_WORDS = 5    # Fewer than this leans fake

# --- Decision ---
FAKE_THRESHOLD = 3
TRUST_THRESHOLD = -2
MAX_CONFIDENCE = 95
NEUTRAL_CONFIDENCE = 83
EMPTY_CONFIDENCE = 0

EMPTY_EXPLANATION = "No headline text was provided."
NEUTRAL_EXPLANATION = (
    "The headline appears neutral and does not match common patterns "
    "of misleading or sensational content."
)


# ============================================================
# THE SCORING ENGINE
# ============================================================

class HeadlineEngine:
    """
    Deterministic headline classifier.

    Instantiated once as a module-level singleton. Holds only a
    reference to the immutable rule table, so one instance can be
    shared by any number of concurrent callers.
    """

    def __init__(self, categories: tuple[RuleCategory, ...] = RULE_CATEGORIES):
        self._categories = categories

    def evaluate(self, headline: str) -> DetectionResult:
        """
        Classify a headline.

        Empty or whitespace-only input returns a fixed "fake" result
        with zero confidence instead of raising.
        """
        result, _ = self.classify(headline)
        return result

    def classify(self, headline: str) -> tuple[DetectionResult, ScoreState]:
        """Classify a headline and return the score state behind the result."""
        original = headline.strip()
        if not original:
            empty = DetectionResult(
                label=LABEL_FAKE,
                confidence=EMPTY_CONFIDENCE,
                explanation=EMPTY_EXPLANATION,
            )
            return empty, ScoreState()

        state = self._accumulate(original)
        return self._decide(state), state

    def score(self, headline: str) -> ScoreState:
        """Run matching and scoring only, without a decision."""
        original = headline.strip()
        if not original:
            return ScoreState()
        return self._accumulate(original)

    def _accumulate(self, original: str) -> ScoreState:
        lower = original.lower()
        state = ScoreState()

        # --- Phase 1: Phrase categories ---
        for category in self._categories:
            if category.matches(lower):
                state.add(category.target, category.weight, category.explanation)

        # --- Phase 2: Structural signals (case-sensitive, on the original) ---
        exclamations = original.count("!")
        if exclamations >= 2:
            state.add(TARGET_FAKE, MULTI_EXCLAMATION_WEIGHT, MULTI_EXCLAMATION_REASON)
        elif exclamations == 1:
            state.add(TARGET_FAKE, SINGLE_EXCLAMATION_WEIGHT, SINGLE_EXCLAMATION_REASON)

        words = original.split()
        if self._count_shouting(words) >= ALL_CAPS_MIN_WORDS:
            state.add(TARGET_FAKE, ALL_CAPS_WEIGHT, ALL_CAPS_REASON)

        # Length nudges carry no explanation sentence
        if len(words) > LONG_HEADLINE_WORDS:
            state.add(TARGET_TRUST, 1)
        elif len(words) < SHORT_HEADLINE_WORDS:
            state.add(TARGET_FAKE, 1)

        return state

    @staticmethod
    def _count_shouting(words: list[str]) -> int:
        """
        Count words written entirely in upper case.

        Punctuation has no case, so "NOW!" still counts. A word with no
        cased characters at all ("2024") also equals its upper-cased
        form and counts too.
        """
        return sum(
            1 for w in words
            if len(w) >= ALL_CAPS_MIN_LENGTH and w == w.upper()
        )

    def _decide(self, state: ScoreState) -> DetectionResult:
        final = state.final_score

        if final >= FAKE_THRESHOLD:
            label = LABEL_FAKE
            confidence = 85 + min(state.fake_score * 2, 10)
        elif final <= TRUST_THRESHOLD:
            label = LABEL_TRUSTWORTHY
            confidence = 80 + min(state.trust_score * 2, 15)
        else:
            label = LABEL_FAKE if final > 0 else LABEL_TRUSTWORTHY
            if state.fake_score == 0 and state.trust_score == 0:
                confidence = NEUTRAL_CONFIDENCE
            else:
                confidence = 70 + abs(final) * 5

        explanation = " ".join(state.reasons) if state.reasons else NEUTRAL_EXPLANATION

        return DetectionResult(
            label=label,
            confidence=min(MAX_CONFIDENCE, confidence),
            explanation=explanation,
        )

    def get_rules(self) -> list[dict]:
        """
        Return the rule table as plain dicts.

        Used by the GET /rules endpoint to expose the detection surface.
        """
        return [
            {
                "id": c.id,
                "name": c.name,
                "weight": c.weight,
                "target": c.target,
                "phrases": list(c.phrases),
                "explanation": c.explanation,
            }
            for c in self._categories
        ]


# --- Singleton ---
headline_engine = HeadlineEngine()


def detect_headline(headline: str) -> DetectionResult:
    """Classify a headline with the shared engine."""
    return headline_engine.evaluate(headline)
