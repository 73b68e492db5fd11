"""
1.0 Frame Module
Flattens entries into pandas DataFrames for CSV export and analysis.

Valid values are projected to text, absent and invalid values become NaN;
the names of invalid fields are kept in their own column so malformed
sitemap data can be filtered and reported on.
"""

import logging
from typing import Iterable, List, Dict, Any

import pandas as pd

from sitemap_model.entries import SitemapEntry, UrlEntry
from sitemap_model.w3c_datetime import format_w3c_datetime

logger = logging.getLogger(__name__)

# 1.1 Column name constants for consistency
COL_LOC = "loc"
COL_LASTMOD = "lastmod"
COL_CHANGEFREQ = "changefreq"
COL_PRIORITY = "priority"
COL_INVALID_FIELDS = "invalid_fields"

URL_COLUMNS = [COL_LOC, COL_LASTMOD, COL_CHANGEFREQ, COL_PRIORITY, COL_INVALID_FIELDS]
SITEMAP_COLUMNS = [COL_LOC, COL_LASTMOD, COL_INVALID_FIELDS]


def _common_row(entry) -> Dict[str, Any]:
    url = entry.loc.get()
    modified = entry.lastmod.get()
    return {
        COL_LOC: url.geturl() if url is not None else None,
        COL_LASTMOD: format_w3c_datetime(modified) if modified is not None else None,
        COL_INVALID_FIELDS: ",".join(entry.invalid_fields()) or None,
    }


def url_entries_to_frame(entries: Iterable[UrlEntry]) -> pd.DataFrame:
    """1.2 One row per page entry, columns in URL_COLUMNS order."""
    rows: List[Dict[str, Any]] = []
    for entry in entries:
        row = _common_row(entry)
        row[COL_CHANGEFREQ] = entry.changefreq.as_str() or None
        row[COL_PRIORITY] = entry.priority.get()
        rows.append(row)

    df = pd.DataFrame(rows, columns=URL_COLUMNS)
    df[COL_PRIORITY] = df[COL_PRIORITY].astype(float)
    logger.info(f"Built URL frame: {len(df):,} rows, {df[COL_INVALID_FIELDS].notna().sum():,} with invalid fields")
    return df


def sitemap_entries_to_frame(entries: Iterable[SitemapEntry]) -> pd.DataFrame:
    """1.3 One row per sitemap reference, columns in SITEMAP_COLUMNS order."""
    rows = [_common_row(entry) for entry in entries]
    df = pd.DataFrame(rows, columns=SITEMAP_COLUMNS)
    logger.info(f"Built sitemap frame: {len(df):,} rows")
    return df
