# File: tests/test_report.py
import json

from page_harvest.crawler.models import PageRecord
from page_harvest.report import render_json


def test_render_json_matches_sink_payload(tmp_path):
    pages = [PageRecord(title="Ünïcode", url="https://wiki.test/wiki/U", language="en", content="текст")]
    path = render_json(pages, tmp_path / "nested" / "pages.json")

    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert "текст" in text
    assert json.loads(text) == {"pages": [p.to_dict() for p in pages]}


def test_render_json_compact(tmp_path):
    path = render_json([], tmp_path / "empty.json", pretty=False)
    assert path.read_text(encoding="utf-8") == '{"pages": []}'
