from __future__ import annotations

import pytest

from prelex.lexing.symbolic import (
    BOUNDARY_CODEPOINTS,
    is_sentence_boundary,
    match_email,
    match_hashtag,
    match_mention,
    match_url,
)


def _surface(fn, s: str, pos: int = 0):
    tok = fn(s.encode("utf-8"), pos)
    return None if tok is None else tok.surface


# ---------------- Url ----------------

@pytest.mark.parametrize(
    "s, want",
    [
        ("https://example.com", "https://example.com"),
        ("http://example.com/path/to/page", "http://example.com/path/to/page"),
        ("https://example.com/search?q=test&page=1", "https://example.com/search?q=test&page=1"),
        ("https://example.com/page#section1", "https://example.com/page#section1"),
        ("https://example.com:8080/path", "https://example.com:8080/path"),
        ("http://localhost:3000", "http://localhost:3000"),
        ("HTTPS://EXAMPLE.COM", "HTTPS://EXAMPLE.COM"),
        ("https://example.com/docs.", "https://example.com/docs"),
        ("https://example.com/a,b,", "https://example.com/a,b"),
        ("https://example.com にアクセス", "https://example.com"),
        ("https://example.com/2024/12/23/article", "https://example.com/2024/12/23/article"),
        ("https://example.com。次", "https://example.com"),
    ],
)
def test_url(s, want):
    assert _surface(match_url, s) == want


def test_url_trims_closing_paren_in_parenthetical():
    assert _surface(match_url, "(https://example.com)", 1) == "https://example.com"


@pytest.mark.parametrize("s", ["https://", "https://.,)'", "ftp://example.com", "example.com", "http:/x"])
def test_url_rejects(s):
    assert _surface(match_url, s) is None


def test_url_token_tagged_symbol():
    tok = match_url(b"https://a.com", 0)
    assert tok.type == "Url" and tok.pos == "Symbol"


# ---------------- Email ----------------

@pytest.mark.parametrize(
    "s, want",
    [
        ("user@example.com", "user@example.com"),
        ("user@mail.example.com", "user@mail.example.com"),
        ("user+tag@example.com", "user+tag@example.com"),
        ("first.last@example.com", "first.last@example.com"),
        ("a-b_c@ex-ample.co.jp", "a-b_c@ex-ample.co.jp"),
        ("user@example.com.", "user@example.com"),
        ("user@example.com まで", "user@example.com"),
    ],
)
def test_email(s, want):
    assert _surface(match_email, s) == want


@pytest.mark.parametrize(
    "s",
    ["user@localhost", "user@", "@example.com", "user.@example.com", "user@example..com", "user@.com"],
)
def test_email_rejects(s):
    assert _surface(match_email, s) is None


def test_email_leading_dot_rejected_at_every_offset():
    data = b".user@example.com"
    for pos in range(0, data.index(b"@")):
        assert match_email(data, pos) is None


def test_email_does_not_start_mid_word():
    assert match_email(b"user@example.com", 1) is None


def test_email_after_space_and_japanese():
    data = "連絡先: user@example.com まで".encode("utf-8")
    pos = data.index(b"user")
    assert match_email(data, pos).surface == "user@example.com"


# ---------------- Hashtag ----------------

@pytest.mark.parametrize(
    "s, want",
    [
        ("#programming", "#programming"),
        ("#プログラミング", "#プログラミング"),
        ("#日本語", "#日本語"),
        ("#C言語", "#C言語"),
        ("#hello_world", "#hello_world"),
        ("＃タグ", "＃タグ"),
        ("#タグ。", "#タグ"),
        ("#hello world", "#hello"),
    ],
)
def test_hashtag(s, want):
    assert _surface(match_hashtag, s) == want


@pytest.mark.parametrize("s", ["# ", "#!", "#", "#。", "tag"])
def test_hashtag_rejects(s):
    assert _surface(match_hashtag, s) is None


# ---------------- Mention ----------------

@pytest.mark.parametrize(
    "s, want",
    [
        ("@user", "@user"),
        ("@user_name", "@user_name"),
        ("@user123", "@user123"),
        ("@taro さんへ", "@taro"),
        ("@alice.", "@alice"),
    ],
)
def test_mention(s, want):
    assert _surface(match_mention, s) == want


@pytest.mark.parametrize("s", ["@ ", "@", "@太郎", "user"])
def test_mention_rejects(s):
    assert _surface(match_mention, s) is None


# ---------------- Boundary ----------------

def test_boundary_set():
    for ch in "。！？!?\n":
        assert is_sentence_boundary(ord(ch))
    for ch in "、.,a 　":
        assert not is_sentence_boundary(ord(ch))
    assert len(BOUNDARY_CODEPOINTS) == 6


def test_boundary_extra():
    extra = frozenset({ord("；")})
    assert is_sentence_boundary(ord("；"), extra)
    assert not is_sentence_boundary(ord("；"))
