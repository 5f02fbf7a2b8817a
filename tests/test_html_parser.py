# File: tests/test_html_parser.py
import itertools

import pytest

from web_archive.models import ResourceKind, ResourceUrl
from web_archive.parser.html_parser import (
    dedup_resource_urls,
    discover_resources,
    parse_document,
    parse_resource_urls,
    serialize_document,
)

BASE = "http://example.com/"


def pairs(resource_urls):
    return [(r.kind, r.url) for r in resource_urls]


def test_image_tags():
    html = """
    <!DOCTYPE html>
    <html>
        <head></head>
        <body>
            <div id="content">
                <img src="/images/fun.png" />
            </div>
        </body>
    </html>
    """
    assert pairs(parse_resource_urls(BASE, html)) == [
        (ResourceKind.IMAGE, "http://example.com/images/fun.png")
    ]


def test_css_tags():
    html = """
    <!DOCTYPE html>
    <html>
        <head>
            <link rel="stylesheet" type="text/css" href="/style.css" />
            <link rel="something_else" href="NOT_ALLOWED" />
        </head>
        <body></body>
    </html>
    """
    assert pairs(parse_resource_urls(BASE, html)) == [
        (ResourceKind.CSS, "http://example.com/style.css")
    ]


@pytest.mark.parametrize(
    "link",
    [
        '<link rel="Stylesheet" href="/a.css">',
        '<link rel="alternate stylesheet" href="/a.css">',
        '<link rel="icon" href="/favicon.ico">',
        '<link rel="stylesheet">',
        '<link href="/a.css">',
    ],
)
def test_non_stylesheet_links_ignored(link):
    assert parse_resource_urls(BASE, f"<html><head>{link}</head></html>") == []


def test_script_tags():
    html = """
    <html>
        <head>
            <script language="javascript" src="/js.js"></script>
            <script>var inline = 1;</script>
        </head>
    </html>
    """
    assert pairs(parse_resource_urls(BASE, html)) == [
        (ResourceKind.JAVASCRIPT, "http://example.com/js.js")
    ]


def test_deep_nesting():
    html = """
    <!DOCTYPE html>
    <html>
        <head>
            <script language="javascript" src="/js.js"></script>
            <link rel="stylesheet" href="1.css" type="text/css" />
        </head>
        <body>
            <div id="content">
                <div><div><div>
                        <img src="1.png" />
                    </div></div>
                    <script src="2.js"></script>
                </div>
                <div><div>
                    <img src="2.tiff" />
                </div></div>
            </div>
        </body>
    </html>
    """
    assert pairs(parse_resource_urls(BASE, html)) == [
        (ResourceKind.CSS, "http://example.com/1.css"),
        (ResourceKind.IMAGE, "http://example.com/1.png"),
        (ResourceKind.JAVASCRIPT, "http://example.com/2.js"),
        (ResourceKind.IMAGE, "http://example.com/2.tiff"),
        (ResourceKind.JAVASCRIPT, "http://example.com/js.js"),
    ]


def test_relative_paths():
    html = """
    <html><body>
        <img src="../../images/fun.png" />
        <img src="/absolute_path.jpg" />
        <img src="https://www.rust-lang.org/static/images/rust-logo-blk.svg" />
    </body></html>
    """
    base = "http://example.com/one/two/three/four/"
    assert sorted(r.url for r in parse_resource_urls(base, html)) == [
        "http://example.com/absolute_path.jpg",
        "http://example.com/one/two/images/fun.png",
        "https://www.rust-lang.org/static/images/rust-logo-blk.svg",
    ]


def test_upper_case_tags():
    html = """
    <HTML>
        <HEAD>
            <SCRIPT LANGUAGE="javascript" SRC="/js.js"></SCRIPT>
            <LINK REL="stylesheet" HREF="/s.css">
        </HEAD>
        <BODY><IMG SRC="/i.png"></BODY>
    </HTML>
    """
    lower = """
    <html><head>
        <script language="javascript" src="/js.js"></script>
        <link rel="stylesheet" href="/s.css">
    </head><body><img src="/i.png"></body></html>
    """
    upper = parse_resource_urls(BASE, html)
    assert pairs(upper) == pairs(parse_resource_urls(BASE, lower))
    assert len(upper) == 3


def test_malformed_html():
    html = """
    <!DOCTYPE html>
    <html>
        <head>
            <script language="javascript" src="/js.js"></script>
        </head>
        <body>
            <div id="content">
                <p>Closing paragraphs is for losers
                <p><img src="a.jpg">
            </div>
        </body>
    </html>
    """
    assert pairs(parse_resource_urls(BASE, html)) == [
        (ResourceKind.IMAGE, "http://example.com/a.jpg"),
        (ResourceKind.JAVASCRIPT, "http://example.com/js.js"),
    ]


def test_invalid_reference_is_dropped():
    html = """
    <img src="http://[::1">
    <script src="http://example.com:99999/x.js"></script>
    <img src="/ok.png">
    """
    assert pairs(parse_resource_urls(BASE, html)) == [
        (ResourceKind.IMAGE, "http://example.com/ok.png")
    ]


def test_same_url_is_discovered_once():
    html = """
    <img src="/shared">
    <img src="http://example.com/shared">
    <script src="shared"></script>
    <link rel="stylesheet" href="./shared">
    """
    assert pairs(parse_resource_urls(BASE, html)) == [
        (ResourceKind.IMAGE, "http://example.com/shared")
    ]


def test_discovery_is_order_independent():
    elements = [
        '<img src="/a.png">',
        '<link rel="stylesheet" href="/b.css">',
        '<script src="/c.js"></script>',
        '<img src="/a.png">',
    ]
    expected = pairs(parse_resource_urls(BASE, "".join(elements)))
    for permutation in itertools.permutations(elements):
        assert pairs(parse_resource_urls(BASE, "".join(permutation))) == expected


def test_discover_on_parsed_document():
    document = parse_document('<img src="x.png">')
    assert discover_resources("http://example.com/dir/", document) == [
        ResourceUrl.image("http://example.com/dir/x.png")
    ]


def test_dedup_keeps_kind_precedence():
    urls = [
        ResourceUrl.javascript("http://example.com/x"),
        ResourceUrl.css("http://example.com/x"),
        ResourceUrl.image("http://example.com/a"),
    ]
    assert pairs(dedup_resource_urls(urls)) == [
        (ResourceKind.IMAGE, "http://example.com/a"),
        (ResourceKind.CSS, "http://example.com/x"),
    ]


def test_serialize_round_trip():
    html = '<p class="a b">x &amp; y</p>'
    assert serialize_document(parse_document(html)) == html


def test_backslash_reference_is_resolved_like_a_browser():
    found = parse_resource_urls("http://example.com/one/two/", r'<img src="..\img\a.png">')
    assert pairs(found) == [(ResourceKind.IMAGE, "http://example.com/one/img/a.png")]


def test_serialize_keeps_attribute_order():
    html = '<img src="a.png" alt="x" class="b"><a title="t" href="/">t</a>'
    assert serialize_document(parse_document(html)) == (
        '<img src="a.png" alt="x" class="b"/><a title="t" href="/">t</a>'
    )
