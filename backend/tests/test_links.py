"""
Tests for Instagram reference normalization and navigation links.
"""
import pytest

from domain.models import Place, PlainText
from services.links import navigation_links, normalize_instagram_url


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("@my.place", "https://www.instagram.com/my.place/"),
        ("myplace/", "https://www.instagram.com/myplace/"),
        ("myplace", "https://www.instagram.com/myplace/"),
        ("  @my_place_01  ", "https://www.instagram.com/my_place_01/"),
        ("my.place///", "https://www.instagram.com/my.place/"),
        ("Cafe.Rambla", "https://www.instagram.com/Cafe.Rambla/"),
    ],
)
def test_bare_handles_are_canonicalized(raw, expected):
    assert normalize_instagram_url(raw) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://instagram.com/myplace",
        "https://www.instagram.com/myplace/",
        "http://instagram.com/p/abc123/",
        "https://m.instagram.com/myplace?hl=es",
    ],
)
def test_instagram_urls_are_returned_unchanged(url):
    assert normalize_instagram_url(url) == url


def test_url_scheme_match_is_case_insensitive():
    assert normalize_instagram_url("HTTPS://www.instagram.com/myplace/") is not None


def test_url_host_match_is_case_insensitive():
    url = "https://WWW.Instagram.COM/myplace/"
    assert normalize_instagram_url(url) == url


@pytest.mark.parametrize(
    "url",
    [
        "https://evil.com/myplace",
        "https://xinstagram.com/myplace",
        "https://notinstagram.com/myplace",
        "https://instagram.com.evil.tld/myplace",
        "https://evil.com/instagram.com",
        "https://evil.com?next=instagram.com",
        "https://instagram.com@evil.com/myplace",
        "https://",
        "http://[::1/",
        "https://instagram.com:notaport/",
        "https://evil.com\\@instagram.com/x",
        "https://evil.com\\.instagram.com/x",
        "https:\\\\evil.com\\@www.instagram.com/x",
        "https://evil.com\t@instagram.com/x",
        "https://evil.com\n@instagram.com/x",
        "https://evil.com\r@instagram.com/x",
        "https://evil.com @instagram.com/x",
        "https://evil.com\x00@instagram.com/x",
        "https://evil.com\x7f@instagram.com/x",
        "https://www.instagram.com/my place/",
    ],
)
def test_non_instagram_or_unparseable_urls_are_rejected(url):
    assert normalize_instagram_url(url) is None


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "@",
        "/",
        "@///",
        "bad handle!",
        "my-place",
        "javascript:alert(1)",
        "<script>",
        'a"onmouseover="x',
        "@@doubleat",
        "ñandú",
        "abc\n/",
        "instagram.com/myplace",
    ],
)
def test_invalid_inputs_are_rejected(raw):
    assert normalize_instagram_url(raw) is None


def test_none_is_rejected():
    assert normalize_instagram_url(None) is None


def test_only_one_leading_at_is_stripped():
    assert normalize_instagram_url("@@x") is None
    assert normalize_instagram_url("@x") == "https://www.instagram.com/x/"


def _place(instagram=None) -> Place:
    return Place(
        id="p1",
        title=PlainText("Cafe"),
        description=PlainText(""),
        category="cafe",
        coordinates=(-34.86, -55.27),
        instagram=instagram,
    )


def test_navigation_links_without_instagram():
    links = navigation_links(_place())
    assert set(links) == {"waze", "google-maps", "apple-maps"}
    assert links["waze"].startswith("https://waze.com/ul?")
    assert "-34.86%2C-55.27" in links["waze"]
    assert "destination=-34.86%2C-55.27" in links["google-maps"]
    assert links["apple-maps"].startswith("https://maps.apple.com/?")


def test_navigation_links_include_valid_instagram():
    links = navigation_links(_place("@cafe.rambla"))
    assert links["instagram"] == "https://www.instagram.com/cafe.rambla/"


def test_navigation_links_drop_invalid_instagram():
    links = navigation_links(_place("https://evil.com/x"))
    assert "instagram" not in links


def test_apple_maps_label_is_encoded():
    links = navigation_links(_place(), label="Café & Bar")
    assert "q=Caf%C3%A9%20%26%20Bar" in links["apple-maps"]
