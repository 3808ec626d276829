"""
Scrapers for provider-published AI model lifecycle pages.

Neither AWS nor Google publish a machine-readable feed, so the model tables
on their documentation pages are read row by row with regular expressions.
The page content is untrusted: every cell goes through strip_html_tags and
dates are only accepted in a handful of known shapes.
"""

import re
from typing import Dict, List, Optional, Pattern, Tuple

import requests

from eol_check.exceptions import APIError
from eol_check.logging_config import logger

SCRAPE_TIMEOUT = 15  # seconds

_ROW = re.compile(r"<tr[^>]*>(.*?)</tr>", re.IGNORECASE | re.DOTALL)
_CELL = re.compile(r"<t[dh][^>]*>(.*?)</t[dh]>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]*>")

_MONTHS = {
    "january": "01",
    "february": "02",
    "march": "03",
    "april": "04",
    "may": "05",
    "june": "06",
    "july": "07",
    "august": "08",
    "september": "09",
    "october": "10",
    "november": "11",
    "december": "12",
}

_NO_SOONER_THAN = re.compile(r"no sooner than (\d+)/(\d+)/(\d+)", re.IGNORECASE)
_MONTH_DAY_YEAR = re.compile(r"(\w+) (\d+), (\d{4})")
_EARLIEST = re.compile(r"earliest (\w+) (\d{4})", re.IGNORECASE)
_ISO = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def strip_html_tags(html: str) -> str:
    """
    Remove HTML tags from untrusted markup.

    Tags are replaced with spaces repeatedly until nothing changes, then any
    leftover angle brackets are dropped so no markup can survive.
    """
    result = html
    previous = None
    while result != previous:
        previous = result
        result = _TAG.sub(" ", result)
    return result.replace("<", "").replace(">", "")


def parse_date(text: Optional[str]) -> Optional[str]:
    """
    Parse a lifecycle date into ``YYYY-MM-DD``.

    Accepted shapes:
        "No sooner than 8/1/2026"  -> "2026-08-01"
        "February 15, 2026"        -> "2026-02-15"
        "Earliest June 2026"       -> "2026-06-01"
        "2026-06-30"               -> unchanged

    Returns None for anything else, including "N/A".
    """
    if not text or text == "N/A":
        return None

    match = _NO_SOONER_THAN.search(text)
    if match:
        month, day, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    match = _MONTH_DAY_YEAR.search(text)
    if match:
        month = _MONTHS.get(match.group(1).lower())
        if month:
            return f"{match.group(3)}-{month}-{match.group(2).zfill(2)}"

    match = _EARLIEST.search(text)
    if match:
        month = _MONTHS.get(match.group(1).lower())
        if month:
            return f"{match.group(2)}-{month}-01"

    if _ISO.match(text):
        return text

    return None


def _fetch_page(url: str, session: requests.Session, label: str) -> str:
    logger.info(f"Fetching {label} model lifecycle page: {url}")
    try:
        response = session.get(url, timeout=SCRAPE_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise APIError(f"{label} fetch failed: {e}")
    return response.text


def _match_model(row_text: str, patterns: List[Tuple[Pattern[str], str]]) -> Optional[str]:
    for pattern, model in patterns:
        if pattern.search(row_text):
            return model
    return None


class BedrockLifecycleScraper:
    """Reads Claude model EOL dates from the AWS Bedrock model lifecycle page."""

    name = "AWS Bedrock"
    provider = "anthropic"
    url = "https://docs.aws.amazon.com/bedrock/latest/userguide/model-lifecycle.html"

    # Most specific first: "claude-sonnet-4-5" must not be read as "claude-sonnet-4"
    patterns: List[Tuple[Pattern[str], str]] = [
        (re.compile(r"claude-sonnet-4-5|claude sonnet 4\.5"), "claude-sonnet-4.5"),
        (re.compile(r"claude-opus-4-1|claude opus 4\.1"), "claude-opus-4.1"),
        (re.compile(r"claude-sonnet-4(?!-5)|claude sonnet 4(?!\.)"), "claude-sonnet-4"),
        (re.compile(r"claude-opus-4(?!-1)|claude opus 4(?!\.)"), "claude-opus-4"),
        (re.compile(r"claude-3-5-sonnet|claude 3\.5 sonnet"), "claude-3.5-sonnet"),
        (re.compile(r"claude-3-5-haiku|claude 3\.5 haiku"), "claude-3.5-haiku"),
        (re.compile(r"claude-3-opus|claude 3 opus"), "claude-3-opus"),
        (re.compile(r"claude-3-sonnet|claude 3 sonnet"), "claude-3-sonnet"),
        (re.compile(r"claude-3-haiku|claude 3 haiku"), "claude-3-haiku"),
    ]

    _slash_date = re.compile(r"(\d+/\d+/\d{4})")
    _no_sooner = re.compile(r"no sooner than (\d+/\d+/\d{4})", re.IGNORECASE)

    def scrape(self, session: requests.Session) -> Dict[str, str]:
        """
        Return ``{model: eol_date}`` for every Claude row with a date.

        Raises:
            APIError: If the page cannot be fetched
        """
        html = _fetch_page(self.url, session, self.name)
        return self.parse(html)

    def parse(self, html: str) -> Dict[str, str]:
        found: Dict[str, str] = {}
        for row in _ROW.findall(html):
            row_text = strip_html_tags(row).lower()
            model = _match_model(row_text, self.patterns)
            if model is None:
                continue

            eol_date = None
            no_sooner = self._no_sooner.search(row_text)
            if no_sooner:
                eol_date = parse_date(f"No sooner than {no_sooner.group(1)}")
            else:
                dates = self._slash_date.findall(row)
                if dates:
                    eol_date = parse_date(f"No sooner than {dates[-1]}")

            if eol_date:
                found[model] = eol_date
        return found


class GoogleDeprecationsScraper:
    """Reads Gemini model shutdown dates from the Gemini API deprecations page."""

    name = "Google AI"
    provider = "google"
    url = "https://ai.google.dev/gemini-api/docs/deprecations"

    patterns: List[Tuple[Pattern[str], str]] = [
        (re.compile(r"gemini-3-pro|gemini 3 pro|gemini 3\.0 pro"), "gemini-3-pro"),
        (re.compile(r"gemini-2\.5-pro|gemini 2\.5 pro"), "gemini-2.5-pro"),
        (re.compile(r"gemini-2\.5-flash|gemini 2\.5 flash"), "gemini-2.5-flash"),
        (re.compile(r"gemini-2\.0-flash|gemini 2\.0 flash"), "gemini-2.0-flash"),
        (re.compile(r"gemini-1\.5-pro|gemini 1\.5 pro"), "gemini-1.5-pro"),
        (re.compile(r"gemini-1\.5-flash|gemini 1\.5 flash"), "gemini-1.5-flash"),
    ]

    _earliest = re.compile(r"earliest (\w+ \d{4})", re.IGNORECASE)
    _long_date = re.compile(r"(\w+ \d+, \d{4})")

    def scrape(self, session: requests.Session) -> Dict[str, str]:
        """
        Return ``{model: eol_date}`` for every Gemini row with a shutdown date.

        Raises:
            APIError: If the page cannot be fetched
        """
        html = _fetch_page(self.url, session, self.name)
        return self.parse(html)

    def parse(self, html: str) -> Dict[str, str]:
        found: Dict[str, str] = {}
        for row in _ROW.findall(html):
            row_text = strip_html_tags(row).lower()
            model = _match_model(row_text, self.patterns)
            if model is None:
                continue

            # Model, release date, shutdown date, notes
            cells = [strip_html_tags(cell).strip() for cell in _CELL.findall(row)]
            if len(cells) < 3:
                continue

            shutdown = cells[2]
            eol_date = None
            earliest = self._earliest.search(shutdown)
            if earliest:
                eol_date = parse_date(earliest.group(0))
            else:
                long_date = self._long_date.search(shutdown)
                if long_date:
                    eol_date = parse_date(long_date.group(1))

            if eol_date:
                found[model] = eol_date
        return found


DEFAULT_SCRAPERS = (BedrockLifecycleScraper, GoogleDeprecationsScraper)
