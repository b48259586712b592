"""Tests for the keyword lexicon and classifier."""

import pytest

from src.intake.domain import KeywordClassifier, Lexicon


class TestLexicon:

    def test_keywords_are_normalized_and_blanks_dropped(self):
        lexicon = Lexicon.from_mapping({"English": {"Water": ["WATER", "", "  ", "Pipe"]}})

        assert lexicon.languages == ("english",)
        assert lexicon.groups_for("english") == (("Water", ("water", "pipe")),)

    def test_category_order_is_preserved(self, lexicon):
        names = [name for name, _ in lexicon.groups_for("english")]
        assert names == ["Water & Sanitation", "Electricity", "Roads & Transport", "General"]

    def test_lexicon_cannot_be_mutated(self, lexicon):
        with pytest.raises(TypeError):
            lexicon._entries["english"] = ()

    def test_empty(self):
        lexicon = Lexicon.empty()
        assert lexicon.is_empty
        assert lexicon.languages == ()
        assert lexicon.groups_for("english") is None


class TestKeywordClassifier:

    def test_matches_english_keyword(self, classifier):
        assert classifier.classify("The water pipe in our street burst", "english") == "Water & Sanitation"

    def test_matching_is_case_insensitive(self, classifier):
        assert classifier.classify("BLACKOUT in the whole sector", "english") == "Electricity"

    def test_matches_kinyarwanda_keyword(self, classifier):
        assert classifier.classify("Nta muriro dufite, amashanyarazi yabuze", "kinyarwanda") == "Electricity"

    def test_language_slice_is_respected(self, classifier):
        # "amazi" is only a Kinyarwanda keyword
        assert classifier.classify("amazi", "english") is None
        assert classifier.classify("amazi", "kinyarwanda") == "Water & Sanitation"

    def test_longer_keyword_outweighs_shorter(self, classifier):
        # "electricity" (11) beats "water" (5)
        assert classifier.classify("water heater has no electricity", "english") == "Electricity"

    def test_scores_are_sum_of_keyword_lengths(self, classifier):
        scores = classifier.score("water pipe broke, there is sewage everywhere", "english")
        assert scores["Water & Sanitation"] == len("water") + len("pipe") + len("sewage")
        assert scores["Electricity"] == 0

    def test_keyword_counts_once(self, classifier):
        once = classifier.score("water", "english")["Water & Sanitation"]
        twice = classifier.score("water water water", "english")["Water & Sanitation"]
        assert once == twice == 5

    def test_tie_goes_to_first_listed_category(self):
        lexicon = Lexicon.from_mapping({"english": {"First": ["abcd"], "Second": ["wxyz"]}})
        classifier = KeywordClassifier(lexicon)

        assert classifier.classify("wxyz and abcd", "english") == "First"

    def test_no_match_returns_none(self, classifier):
        assert classifier.classify("I would like to say thank you", "english") is None

    def test_empty_description_returns_none(self, classifier):
        assert classifier.classify("", "english") is None

    def test_unknown_language_falls_back_to_english(self, classifier):
        assert classifier.resolve_language("french") == "english"
        assert classifier.classify("the road has a pothole", "french") == "Roads & Transport"

    def test_missing_language_falls_back_to_english(self, classifier):
        assert classifier.classify("the road has a pothole", None) == "Roads & Transport"

    def test_language_is_normalized(self, classifier):
        assert classifier.resolve_language(" Kinyarwanda ") == "kinyarwanda"

    def test_supported_language_without_lexicon_entry_misses(self):
        lexicon = Lexicon.from_mapping({"english": {"Water": ["water"]}})
        classifier = KeywordClassifier(lexicon)

        assert classifier.resolve_language("kinyarwanda") == "kinyarwanda"
        assert classifier.classify("water", "kinyarwanda") is None

    def test_empty_lexicon_never_matches(self):
        classifier = KeywordClassifier(Lexicon.empty())
        assert classifier.classify("water pipe electricity road", "english") is None

    def test_is_deterministic(self, classifier):
        text = "power is out and the road is flooded with water"
        results = {classifier.classify(text, "english") for _ in range(20)}
        assert len(results) == 1
