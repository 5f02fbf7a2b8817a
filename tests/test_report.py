# File: tests/test_report.py
import json

from pages import PNG_BYTES
from web_archive.models import CssResource, ImageResource
from web_archive.page_archive import PageArchive
from web_archive.report import build_report, render_json


def make_archive() -> PageArchive:
    return PageArchive(
        "http://example.com/",
        "<html></html>",
        {
            "http://example.com/b.png": ImageResource(PNG_BYTES, "image/png"),
            "http://example.com/a.css": CssResource("p{}"),
        },
    )


def test_build_report():
    report = build_report(make_archive(), discovered=3)

    assert report.downloaded == 2
    assert report.missing == 1
    assert [r["url"] for r in report.resources] == [
        "http://example.com/a.css",
        "http://example.com/b.png",
    ]
    assert report.resources[1] == {
        "url": "http://example.com/b.png",
        "kind": "image",
        "mimetype": "image/png",
        "size": len(PNG_BYTES),
    }


def test_report_json():
    data = json.loads(build_report(make_archive(), discovered=2).json(pretty=True))
    assert data["url"] == "http://example.com/"
    assert data["discovered"] == 2
    assert data["downloaded"] == 2
    assert data["missing"] == 0


def test_render_json(tmp_path):
    out = render_json(build_report(make_archive(), discovered=2), tmp_path / "nested" / "report.json")
    assert out.exists()
    assert json.loads(out.read_text(encoding="utf-8"))["resources"][0]["kind"] == "css"
