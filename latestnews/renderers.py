"""Render an :class:`~latestnews.items.ArticleRecord` as HTML or plain text.

Both renderers are pure: the same record always yields the same string.
"""

from __future__ import annotations

import html
from datetime import datetime

from latestnews.items import ArticleRecord

NO_CONTENT_PLACEHOLDER = "(No article text extracted)"

# Page chrome per primary language subtag; unknown languages fall back to "en"
_LABELS: dict[str, dict[str, str]] = {
    "en": {
        "heading": "Latest {site} article",
        "description": "Latest {site} article. Updated: {fetched}",
        "source": "Source",
        "updated": "Updated",
        "footer": "Generated automatically with a headless browser.",
        "no_content": NO_CONTENT_PLACEHOLDER,
    },
    "fi": {
        "heading": "Viimeisin {site}-artikkeli",
        "description": "Viimeisin {site}-artikkeli. Päivitetty: {fetched}",
        "source": "Lähde",
        "updated": "Päivitetty",
        "footer": "Rakennettu automaattisesti Playwright-selaimella.",
        "no_content": "(Artikkelin tekstiä ei saatu)",
    },
}


def page_labels(language: str) -> dict[str, str]:
    """Return the page chrome strings for *language* (e.g. ``fi``, ``en-GB``)."""
    primary = (language or "").split("-", 1)[0].strip().lower()
    return _LABELS.get(primary, _LABELS["en"])

_STYLE = """\
    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; margin: 2rem auto; padding: 0 1rem; max-width: 820px; line-height: 1.6; color: #111; }
    header { margin-bottom: 1.5rem; }
    h1 { font-size: 1.8rem; margin: 0 0 .5rem 0; }
    .meta { color: #666; font-size: .95rem; }
    a { color: #0a63c6; text-decoration: none; }
    a:hover { text-decoration: underline; }
    footer { margin-top: 2rem; color: #666; font-size: .9rem; }"""


def escape_html(value: str) -> str:
    """Escape ``& < > " '`` for use in element text and attribute values."""
    return html.escape(value or "", quote=True)


def format_timestamp(fetched_at: str) -> str:
    """Turn an ISO-8601 timestamp into ``YYYY-MM-DD HH:MM UTC``.

    Unparseable input is returned unchanged.
    """
    try:
        moment = datetime.fromisoformat(fetched_at)
    except (TypeError, ValueError):
        return fetched_at
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def render_html(
    record: ArticleRecord,
    *,
    site_name: str = "Yle",
    language: str = "fi",
) -> str:
    """Return a self-contained HTML page for *record*.

    Every interpolated value is escaped.  Each body line becomes one
    ``<p>``; an empty body renders a single placeholder paragraph.  Labels,
    the fallback heading and the footer follow *language*.
    """
    labels = page_labels(language)
    heading = record.title or labels["heading"].format(site=site_name)
    description = labels["description"].format(site=site_name, fetched=record.fetched_at)
    fetched = escape_html(record.fetched_at)
    url = escape_html(record.url)

    if record.lines:
        paragraphs = "\n    ".join(f"<p>{escape_html(line)}</p>" for line in record.lines)
    else:
        paragraphs = f"<p>{escape_html(labels['no_content'])}</p>"

    lines: list[str] = [
        "<!doctype html>",
        f'<html lang="{escape_html(language)}">',
        "<head>",
        '  <meta charset="utf-8" />',
        '  <meta name="viewport" content="width=device-width, initial-scale=1" />',
        f"  <title>{escape_html(heading)}</title>",
        "  <style>",
        _STYLE,
        "  </style>",
        '  <meta name="robots" content="noindex" />',
        f'  <meta property="og:title" content="{escape_html(heading)}" />',
        f'  <meta property="og:url" content="{url}" />',
        f'  <meta name="description" content="{escape_html(description)}" />',
        '  <link rel="icon" href="data:," />',
        "</head>",
        "<body>",
        "  <header>",
        f"    <h1>{escape_html(heading)}</h1>",
        f'    <div class="meta">{labels["source"]}: <a href="{url}">{url}</a> · '
        f'{labels["updated"]}: <time datetime="{fetched}">'
        f"{escape_html(format_timestamp(record.fetched_at))}</time></div>",
        "  </header>",
        "  <main>",
        f"    {paragraphs}",
        "  </main>",
        "  <footer>",
        f"    {labels['footer']}",
        "  </footer>",
        "</body>",
        "</html>",
        "",
    ]
    return "\n".join(lines)


def render_text(record: ArticleRecord) -> str:
    """Return the console summary: title, URL, separator, body."""
    lines: list[str] = []
    if record.title:
        lines.append(f"TITLE: {record.title}")
    lines.append(f"URL: {record.url}")
    lines.append("---")
    lines.append(record.text or NO_CONTENT_PLACEHOLDER)
    return "\n".join(lines)
