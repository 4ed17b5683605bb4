# File: webcrawler/report/__init__.py
"""webcrawler.report: генерация отчётов (JSON и HTML) для CLI."""

from webcrawler.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from webcrawler.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
