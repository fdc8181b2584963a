import pytest

from shortlink.shortener import URL_SAFE_CHARS, random_url

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


@pytest.mark.parametrize("length", [1, 6, 10, 32])
def test_length_is_respected(length):
    assert len(random_url(length)) == length


@pytest.mark.parametrize("length", [0, -1, -100])
def test_non_positive_length_defaults_to_eight(length):
    assert len(random_url(length)) == 8


def test_only_url_safe_characters():
    code = random_url(200)
    assert set(code) <= set(URL_SAFE_CHARS)


def test_codes_drawn_from_62_character_alphabet():
    drawn = set(random_url(5000))
    assert drawn <= set(ALPHABET)
    assert set(URL_SAFE_CHARS) == set(ALPHABET)
    assert len(drawn) > 40


def test_codes_vary():
    codes = {random_url(6) for _ in range(50)}
    assert len(codes) > 1