"""
Tests for the Headline Engine — the most important tests in the system.

If the engine doesn't classify correctly, nothing else matters.
"""

import dataclasses

import pytest
from headlinecheck.engine import (
    ENGINE_VERSION,
    EMPTY_EXPLANATION,
    NEUTRAL_EXPLANATION,
    RULE_CATEGORIES,
    HeadlineEngine,
    DetectionResult,
    detect_headline,
    headline_engine,
)


class TestEngineVersion:
    def test_version_exists(self):
        assert ENGINE_VERSION == "1.0.0"


class TestEmptyInput:
    """Empty headlines short-circuit to a fixed result."""

    @pytest.mark.parametrize("headline", ["", "   ", "\t\n  "])
    def test_empty_returns_sentinel(self, headline):
        result = detect_headline(headline)
        assert result == DetectionResult(
            label="fake",
            confidence=0,
            explanation="No headline text was provided.",
        )

    def test_empty_score_is_zero(self):
        state = headline_engine.score("  ")
        assert state.fake_score == 0
        assert state.trust_score == 0
        assert state.reasons == []


class TestScenarios:
    """End-to-end classifications with known outcomes."""

    def test_impossible_claim(self):
        result = detect_headline(
            "Scientists confirm teleportation technology is ready for public use"
        )
        assert result.label == "fake"
        assert result.confidence == 95
        assert result.explanation == (
            "The headline includes impossible or pseudoscientific claims."
        )

    def test_credible_cue(self):
        result = detect_headline(
            "New study published in a journal shows climate change accelerating"
        )
        assert result.label == "trustworthy"
        assert result.confidence == 88
        assert result.explanation == "References research, studies, or official sources."

    def test_clickbait_punctuation_caps(self):
        headline = "BREAKING NEWS SHOCKING DISCOVERY!!!"
        result = detect_headline(headline)
        assert result.label == "fake"
        assert result.confidence == 95

        state = headline_engine.score(headline)
        # clickbait 4 + exclamations 3 + caps 3 + short headline 1
        assert state.fake_score == 11
        assert state.trust_score == 0

    def test_neutral_default(self):
        result = detect_headline("City council approves new budget for road repairs")
        assert result.label == "trustworthy"
        assert result.confidence == 83
        assert result.explanation == NEUTRAL_EXPLANATION


class TestRuleCategories:
    """Each phrase category fires once with its fixed weight."""

    def test_five_categories_in_order(self):
        assert [c.id for c in RULE_CATEGORIES] == [
            "IMPOSSIBLE_CLAIMS",
            "STRONG_CLICKBAIT",
            "SENSATIONAL_WORDS",
            "ABSOLUTE_LANGUAGE",
            "TRUSTWORTHY_CUES",
        ]
        assert [c.weight for c in RULE_CATEGORIES] == [5, 4, 3, 2, 4]

    @pytest.mark.parametrize("headline, fake, trust", [
        ("Local man claims he found the secret of immortality today", 5, 0),
        ("You won't believe what this local bakery did last week", 4, 0),
        ("Mayor caught in a budget scandal over the new stadium", 3, 0),
        ("Why parents always worry about the first day of school", 2, 0),
        ("Harvard university team maps the migration routes of birds", 0, 4),
    ])
    def test_single_category(self, headline, fake, trust):
        state = headline_engine.score(headline)
        assert state.fake_score == fake
        assert state.trust_score == trust
        assert len(state.reasons) == 1

    def test_category_fires_once(self):
        # "shocking", "explosive" and "unbelievable" are all clickbait
        state = headline_engine.score(
            "Shocking and explosive report reveals unbelievable facts about diets"
        )
        assert state.fake_score == 4
        assert state.reasons == ["The headline uses strong clickbait expressions."]

    def test_match_is_case_insensitive(self):
        state = headline_engine.score("Company Says Its Product Is A Miracle For Gardens")
        assert state.fake_score == 3

    def test_substring_match_without_word_boundary(self):
        # "never" inside "nevertheless", "study" inside "understudy"
        state = headline_engine.score("Nevertheless the understudy took the stage last night")
        assert state.fake_score == 2
        assert state.trust_score == 4


class TestStructuralSignals:
    """Exclamation marks, ALL-CAPS words, and headline length."""

    def test_single_exclamation(self):
        state = headline_engine.score("The new bridge over the river opens today!")
        assert state.fake_score == 1
        assert state.reasons == ["Exclamation mark suggests emotional emphasis."]

    def test_multiple_exclamations(self):
        state = headline_engine.score("The new bridge over the river opens today!!")
        assert state.fake_score == 3
        assert state.reasons == ["Multiple exclamation marks indicate exaggeration."]

    def test_exclamations_need_not_be_adjacent(self):
        state = headline_engine.score("Wow! The new bridge over the river opens today!")
        assert state.fake_score == 3

    def test_two_caps_words_fire(self):
        state = headline_engine.score("URGENT warning issued as HEAVY rain moves into region")
        assert state.fake_score == 3
        assert state.reasons == ["Contains ALL-CAPS words often used in fake headlines."]

    def test_one_caps_word_does_not_fire(self):
        state = headline_engine.score("URGENT warning issued as heavy rain moves into region")
        assert state.fake_score == 0

    def test_short_caps_words_ignored(self):
        # NASA is four letters and counts, USA and EU are too short
        state = headline_engine.score("NASA and USA and EU sign a deal on lunar cargo")
        assert state.fake_score == 0

    def test_caps_with_trailing_punctuation(self):
        state = headline_engine.score("Residents told to act NOW! as FLOOD. waters rise fast")
        # one exclamation (1) + caps NOW! and FLOOD. (3)
        assert state.fake_score == 4

    def test_short_headline_leans_fake(self):
        state = headline_engine.score("Mayor resigns today")
        assert state.fake_score == 1
        assert state.reasons == []

    def test_long_headline_leans_trust(self):
        headline = (
            "The regional transport authority has approved a plan to extend "
            "the northern line by three stations over the next decade"
        )
        state = headline_engine.score(headline)
        assert len(headline.split()) > 14
        assert state.trust_score == 1
        assert state.fake_score == 0

    def test_length_nudges_have_no_explanation(self):
        result = detect_headline("Mayor resigns today")
        assert result.explanation == NEUTRAL_EXPLANATION


class TestExplanationOrder:
    """Sentences appear in category order, then structural order."""

    def test_categories_before_structural(self):
        state = headline_engine.score(
            "Shocking miracle study says everyone can live forever!"
        )
        assert state.reasons == [
            "The headline includes impossible or pseudoscientific claims.",
            "The headline uses strong clickbait expressions.",
            "The wording is sensational or emotionally exaggerated.",
            "Contains absolute language often found in misleading content.",
            "References research, studies, or official sources.",
            "Exclamation mark suggests emotional emphasis.",
        ]

    def test_explanation_joined_with_single_space(self):
        result = detect_headline("Shocking miracle cure leaves doctors speechless again")
        assert result.explanation == (
            "The headline uses strong clickbait expressions. "
            "The wording is sensational or emotionally exaggerated."
        )


class TestDecision:
    """Thresholds and confidence arithmetic."""

    def test_fake_threshold(self):
        # absolute (2) + single exclamation (1) = 3
        result = detect_headline("Why parents always worry about the first day!")
        assert result.label == "fake"
        assert result.confidence == 85 + 6

    def test_fake_confidence_saturates(self):
        result = detect_headline("Shocking miracle: scientists finally cure cancer forever")
        # impossible 5 + clickbait 4 + sensational 3 = 12, bonus capped at 10
        assert result.label == "fake"
        assert result.confidence == 95

    def test_trust_threshold(self):
        # trust 4, absolute 2 -> final -2
        result = detect_headline("New research shows cats never forget a familiar face")
        assert result.label == "trustworthy"
        assert result.confidence == 88

    def test_borderline_fake(self):
        # absolute language alone: final 2
        result = detect_headline("Why parents always worry about the first day of school")
        assert result.label == "fake"
        assert result.confidence == 80

    def test_borderline_single_point(self):
        result = detect_headline("Mayor resigns today")
        assert result.label == "fake"
        assert result.confidence == 75

    def test_borderline_trust(self):
        headline = (
            "The regional transport authority has approved a plan to extend "
            "the northern line by three stations over the next decade"
        )
        result = detect_headline(headline)
        assert result.label == "trustworthy"
        assert result.confidence == 75

    def test_balanced_signals_are_trustworthy(self):
        # clickbait 4 against trust cues 4 -> final 0
        result = detect_headline("Shocking new study on sleep habits of office workers")
        assert result.label == "trustworthy"
        assert result.confidence == 70


class TestProperties:
    """Determinism, bounds, and monotonicity."""

    HEADLINES = [
        "",
        "Scientists confirm teleportation technology is ready for public use",
        "BREAKING NEWS SHOCKING DISCOVERY!!!",
        "City council approves new budget for road repairs",
        "According to official data, unemployment fell in March",
        "YOU WON'T BELIEVE THIS MIRACLE!!!",
        "a",
        "!!!!!!!!",
    ]

    @pytest.mark.parametrize("headline", HEADLINES)
    def test_deterministic(self, headline):
        assert detect_headline(headline) == detect_headline(headline)

    @pytest.mark.parametrize("headline", HEADLINES)
    def test_confidence_bounds(self, headline):
        result = detect_headline(headline)
        assert 0 <= result.confidence <= 95
        assert isinstance(result.confidence, int)
        assert result.label in ("fake", "trustworthy")

    def test_adding_fake_categories_keeps_fake(self):
        base = "Shocking report on the budget of the city"
        assert detect_headline(base).label == "fake"
        for extra in (" scandal", " always", " immortal"):
            base += extra
            assert detect_headline(base).label == "fake"

    def test_fresh_state_per_call(self):
        detect_headline("Shocking miracle!!")
        assert detect_headline("City council approves new budget for road repairs").confidence == 83


class TestRuleTable:
    """The rule table is immutable."""

    def test_category_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            RULE_CATEGORIES[0].weight = 100

    def test_result_is_frozen(self):
        result = detect_headline("Mayor resigns today")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.label = "trustworthy"

    def test_get_rules_is_a_copy(self):
        rules = headline_engine.get_rules()
        rules[0]["phrases"].append("boring")
        assert "boring" not in RULE_CATEGORIES[0].phrases

    def test_custom_engine_uses_given_table(self):
        engine = HeadlineEngine(categories=RULE_CATEGORIES[-1:])
        state = engine.score("Shocking new study on sleep habits of office workers")
        assert state.fake_score == 0
        assert state.trust_score == 4


class TestClassify:
    """classify() returns the result together with the state that produced it."""

    @pytest.mark.parametrize("headline", TestProperties.HEADLINES)
    def test_matches_evaluate_and_score(self, headline):
        result, state = headline_engine.classify(headline)
        assert result == headline_engine.evaluate(headline)
        assert state == headline_engine.score(headline)

    def test_single_scoring_pass(self):
        from unittest.mock import patch

        engine = HeadlineEngine()
        with patch.object(engine, "_accumulate", wraps=engine._accumulate) as spy:
            result, state = engine.classify("BREAKING NEWS SHOCKING DISCOVERY!!!")
        assert spy.call_count == 1
        assert result.confidence == 95
        assert state.fake_score == 11

    def test_empty_headline_skips_scoring(self):
        from unittest.mock import patch

        engine = HeadlineEngine()
        with patch.object(engine, "_accumulate") as spy:
            result, state = engine.classify("   ")
        spy.assert_not_called()
        assert result.explanation == EMPTY_EXPLANATION
        assert state.final_score == 0
