"""Tests for shared utility functions."""

from bookwise.utils import format_phone, normalize_phone, phones_match


class TestNormalizePhone:
    def test_strips_dashes(self):
        assert normalize_phone("123-456-7890") == "1234567890"

    def test_strips_parentheses_and_spaces(self):
        assert normalize_phone("(123) 456-7890") == "1234567890"

    def test_clean_number_unchanged(self):
        assert normalize_phone("1234567890") == "1234567890"

    def test_plus_sign_is_dropped(self):
        assert normalize_phone("+1 123 456 7890") == "11234567890"

    def test_empty_string(self):
        assert normalize_phone("") == ""


class TestPhonesMatch:
    def test_common_formats_match(self):
        variants = ["123-456-7890", "1234567890", "(123) 456-7890"]
        for left in variants:
            for right in variants:
                assert phones_match(left, right)

    def test_different_numbers_do_not_match(self):
        assert not phones_match("123-456-7890", "123-456-7891")

    def test_country_code_is_not_canonicalized(self):
        assert not phones_match("+1 123-456-7890", "123-456-7890")

    def test_empty_numbers_never_match(self):
        assert not phones_match("", "")
        assert not phones_match("---", "")


class TestFormatPhone:
    def test_short_input(self):
        assert format_phone("12") == "12"

    def test_partial_input(self):
        assert format_phone("12345") == "123-45"

    def test_full_number(self):
        assert format_phone("1234567890") == "123-456-7890"

    def test_extra_digits_are_dropped(self):
        assert format_phone("(123) 456 78901") == "123-456-7890"
