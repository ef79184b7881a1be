"""Write rendered artifacts to disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from latestnews.items import ArticleRecord
from latestnews.renderers import render_html

logger = logging.getLogger(__name__)

RECORD_FILENAME = "latest.json"


def _write_json(path: Path, data: dict | list) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def write_site(
    record: ArticleRecord,
    out_path: str | Path,
    *,
    site_name: str = "Yle",
    language: str = "fi",
) -> tuple[Path, Path]:
    """Write the HTML page to *out_path* and ``latest.json`` beside it.

    Parent directories are created as needed.

    Returns:
        ``(html_path, json_path)``
    """
    html_path = Path(out_path)
    json_path = html_path.parent / RECORD_FILENAME
    _write_text(html_path, render_html(record, site_name=site_name, language=language))
    _write_json(json_path, record.to_json_dict())
    logger.info("Wrote %s and %s", html_path, json_path)
    return html_path, json_path
