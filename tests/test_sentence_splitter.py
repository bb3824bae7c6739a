"""
Tests for abbreviation-aware sentence splitting.
"""

from core import sentence_splitter


class TestSplit:
    def test_abbreviation_does_not_split(self):
        out = sentence_splitter.split("Dr. Smith published a report. It showed 10% growth.")
        assert out == ["Dr. Smith published a report.", "It showed 10% growth."]

    def test_multiple_abbreviations(self):
        text = "Mrs. Jones moved to the U.S. in 1999. She works for Acme Inc. today!"
        out = sentence_splitter.split(text)
        assert out == [
            "Mrs. Jones moved to the U.S. in 1999.",
            "She works for Acme Inc. today!",
        ]

    def test_latin_abbreviations(self):
        out = sentence_splitter.split("Fruit, e.g. apples, is healthy. Eat more, i.e. daily.")
        assert len(out) == 2
        assert out[0].startswith("Fruit, e.g. apples")

    def test_abbreviation_inside_a_word_still_ends_a_sentence(self):
        assert sentence_splitter.split("We hired two devs. They shipped it.") == [
            "We hired two devs.",
            "They shipped it.",
        ]
        assert sentence_splitter.split("The team beat Bayern vs. Dortmund fans. It was loud.") == [
            "The team beat Bayern vs. Dortmund fans.",
            "It was loud.",
        ]

    def test_decimal_numbers(self):
        assert sentence_splitter.split("Inflation hit 3.5 percent. Rates rose.") == [
            "Inflation hit 3.5 percent.",
            "Rates rose.",
        ]

    def test_punctuation_runs_and_trailing_text(self):
        out = sentence_splitter.split("Really?! Yes... and then nothing")
        assert out == ["Really?!", "Yes...", "and then nothing"]

    def test_empty_and_whitespace(self):
        assert sentence_splitter.split("") == []
        assert sentence_splitter.split("   ") == []

    def test_restartable(self):
        text = "One sentence here. Another one there."
        assert sentence_splitter.split(text) == sentence_splitter.split(text)
