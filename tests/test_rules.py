"""Tests for keyword extraction and relevance rules."""

import pytest

from focusfirewall.classify.rules import (
    classify,
    extract_keywords,
    get_stop_words,
    is_relevant,
)


class TestExtractKeywords:
    """Test extract_keywords()."""

    def test_empty_input(self):
        """Empty or missing text yields no keywords."""
        assert extract_keywords("") == frozenset()
        assert extract_keywords(None) == frozenset()

    def test_goal_example(self):
        """Example goal keeps its content words."""
        assert extract_keywords("learn rust programming") == {"learn", "rust", "programming"}

    def test_lowercases_and_strips_punctuation(self):
        """Punctuation becomes a separator and case is folded."""
        assert extract_keywords("Rust/WebAssembly, C++!") == {"rust", "webassembly"}

    def test_drops_short_tokens(self):
        """Tokens of two characters or fewer are dropped."""
        assert extract_keywords("go ml k8s ai") == {"k8s"}

    @pytest.mark.parametrize("word", ["the", "and", "you", "your", "would", "should", "what"])
    def test_drops_stop_words(self, word):
        """Stop words never become keywords."""
        assert word in get_stop_words()
        assert extract_keywords(f"{word} python") == {"python"}

    def test_only_stop_words(self):
        """A goal made only of stop words has no keywords."""
        assert extract_keywords("what would you do") == frozenset()

    def test_non_ascii_letters_are_separators(self):
        """Characters outside [a-z0-9] split tokens."""
        assert extract_keywords("café résumé") == {"caf", "sum"}

    def test_deterministic(self):
        """Same text, same keywords."""
        assert extract_keywords("Deep learning basics") == extract_keywords("Deep learning basics")


class TestIsRelevant:
    """Test the relevance predicate."""

    def test_empty_keywords_fail_open(self):
        """No keywords means everything is relevant."""
        assert is_relevant(frozenset(), "Cute cat compilation")
        assert is_relevant(extract_keywords("the and of"), "anything at all")

    def test_case_insensitive_match(self):
        """Keywords match regardless of title case."""
        keywords = extract_keywords("learn rust programming")
        assert is_relevant(keywords, "Rust ownership explained")

    def test_no_match(self):
        """Titles without any keyword are irrelevant."""
        keywords = extract_keywords("learn rust programming")
        assert not is_relevant(keywords, "Cute cat compilation")

    def test_substring_not_whole_word(self):
        """Matching is substring containment, not whole-word."""
        keywords = extract_keywords("art")
        assert is_relevant(keywords, "Smart contract audit")
        assert is_relevant(keywords, "Chart patterns")

    def test_any_keyword_suffices(self):
        """One matching keyword is enough."""
        assert is_relevant({"python", "django"}, "Django in 10 minutes")

    def test_empty_title(self):
        """An empty title cannot match a non-empty keyword set."""
        assert not is_relevant({"rust"}, "")


class TestClassify:
    """Test classify() details."""

    def test_reports_matched_keywords(self):
        """Matched keywords are listed in sorted order."""
        result = classify({"rust", "async", "golang"}, "Async Rust in depth")
        assert result.is_relevant
        assert result.matched_keywords == ["async", "rust"]

    def test_fail_open_has_no_matches(self):
        """Fail-open results carry no matched keywords."""
        result = classify(set(), "Anything")
        assert result.is_relevant
        assert result.matched_keywords == []
