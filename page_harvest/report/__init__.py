# File: page_harvest/report/__init__.py
"""page_harvest.report: сохранение собранного пакета страниц на диск."""

from page_harvest.report.json_report import render_json

__all__ = ["render_json"]
