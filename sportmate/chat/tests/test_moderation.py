import pytest

from sportmate.chat.moderation import contains_banned_term


@pytest.mark.parametrize(
    "text",
    ["what an idiot", "Bombs away", "HATE losing", "no drugs at the park"],
)
def test_banned_terms_are_caught(text):
    assert contains_banned_term(text)


@pytest.mark.parametrize(
    "text",
    ["sticking to my diet", "studied the playbook", "Thursday at 6", "", None],
)
def test_clean_text_passes(text):
    assert not contains_banned_term(text)
