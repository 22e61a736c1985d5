"""Tests for text tokenization"""

from nextword.tokenizer import clean_text, tokenize


class TestTokenize:
    """Test tokenize()"""

    def test_simple_sentence(self):
        assert tokenize("the quick brown fox") == ["the", "quick", "brown", "fox"]

    def test_lowercases(self):
        assert tokenize("Hello WORLD") == ["hello", "world"]

    def test_punctuation_separates_tokens(self):
        assert tokenize("hello,world!how-are.you") == ["hello", "world", "how", "are", "you"]

    def test_keeps_apostrophes(self):
        assert tokenize("Don't stop, I'm fine") == ["don't", "stop", "i'm", "fine"]

    def test_keeps_digits(self):
        assert tokenize("meet at 10 on 3rd") == ["meet", "at", "10", "on", "3rd"]

    def test_whitespace_runs(self):
        assert tokenize("  a \t b\n\nc  ") == ["a", "b", "c"]

    def test_empty_inputs(self):
        assert tokenize("") == []
        assert tokenize("   ") == []
        assert tokenize(None) == []
        assert tokenize("?!... ---") == []

    def test_non_ascii_letters_are_separators(self):
        assert tokenize("café au lait") == ["caf", "au", "lait"]
        assert tokenize("naïve") == ["na", "ve"]

    def test_deterministic(self):
        text = "The cat, the hat."
        assert tokenize(text) == tokenize(text)


class TestCleanText:
    """Test clean_text()"""

    def test_joins_tokens(self):
        assert clean_text("  Hello,   World! ") == "hello world"

    def test_empty(self):
        assert clean_text("") == ""
