import pytest

from skillsync.utils.password_validation import password_problems, password_strength


def test_strong_password_has_no_problems():
    assert password_problems("Vivid#Ocean7Tree") == []


@pytest.mark.parametrize("password, problem", [
    ("Sh0rt!", "at least 8 characters"),
    ("lowercase#only9", "uppercase"),
    ("UPPERCASE#ONLY9", "lowercase"),
    ("No#Digits#Here", "number"),
    ("NoSpecial9Chars", "special character"),
    ("My#Password9", "too common"),
    ("Zaaaa#Tree9", "repeated characters"),
    ("Tree#12345Go", "common sequences"),
    ("Tree#Qwerty9", "common sequences"),
])
def test_rules(password, problem):
    assert any(problem in message for message in password_problems(password))


def test_too_long():
    assert any("less than 128" in p for p in password_problems("Aa1!" * 40))


@pytest.mark.parametrize("password, strength", [
    ("Vivid#Ocean7Tree", "strong"),
    ("Vivid#Oce7", "medium"),
    ("vivid7tree", "weak"),
])
def test_strength(password, strength):
    assert password_strength(password) == strength
