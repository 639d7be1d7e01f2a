import pytest

from detag.decoding.base import Decoder, HtmlEntityDecoder, IdentityDecoder, UrlDecoder


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a%20b", "a b"),
        ("a+b", "a b"),
        ("%E2%82%AC", "€"),
        ("%zz%", "%zz%"),
        ("%ff", "\ufffd"),
        ("", ""),
    ],
)
def test_url_decoder(raw, expected):
    assert UrlDecoder().decode(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("&amp;&lt;&gt;", "&<>"),
        ("&#39;&#x41;", "'A"),
        ("&nbsp;", "\xa0"),
        ("&bogus;", "&bogus;"),
        ("AT&T", "AT&T"),
    ],
)
def test_entity_decoder(raw, expected):
    assert HtmlEntityDecoder().decode(raw) == expected


def test_identity_decoder():
    assert IdentityDecoder().decode("%20&amp;") == "%20&amp;"


def test_decoder_is_abstract():
    with pytest.raises(TypeError):
        Decoder()
