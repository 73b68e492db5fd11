"""
1.0 Sitemap Writer Module
Serializes UrlEntry / SitemapEntry records back to sitemap XML.

Only valid field values are written. Absent and invalid optional fields are
left out, which is what the protocol expects for optional hints.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional, Any

from lxml import etree

from sitemap_model.config import merge_config
from sitemap_model.entries import SitemapEntry, UrlEntry
from sitemap_model.reader import SITEMAP_NS
from sitemap_model.w3c_datetime import format_w3c_datetime

logger = logging.getLogger(__name__)

_NS = SITEMAP_NS['sm']


def format_priority(value: float) -> str:
    """Fixed-point decimal text for a priority (<priority> is an xsd:decimal)."""
    # repr() gives the shortest round-tripping digits; Decimal drops the exponent
    return format(Decimal(repr(value)), "f")


class SitemapWriter:
    """
    2.0 SitemapWriter Class
    Builds urlset and sitemapindex documents with lxml.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        2.1 Initialize the writer.

        Args:
            config: Configuration dictionary; the "writer" section may set
                pretty_print, xml_declaration and encoding.
        """
        options = merge_config(config)["writer"]
        self.pretty_print = options["pretty_print"]
        self.xml_declaration = options["xml_declaration"]
        self.encoding = options["encoding"]
        logger.info(f"SitemapWriter initialized (encoding={self.encoding}, pretty_print={self.pretty_print}).")

    def write_urlset(self, entries: Iterable[UrlEntry]) -> bytes:
        """2.2 Serialize page entries as a <urlset> document."""
        root = etree.Element(f"{{{_NS}}}urlset", nsmap={None: _NS})
        count = 0
        for entry in entries:
            url_element = etree.SubElement(root, f"{{{_NS}}}url")
            self._append_common(url_element, entry.loc, entry.lastmod)

            changefreq = entry.changefreq.as_str()
            if changefreq:
                self._sub(url_element, "changefreq", changefreq)

            priority = entry.priority.get()
            if priority is not None:
                self._sub(url_element, "priority", format_priority(priority))
            count += 1

        logger.info(f"Wrote {count} URL entries to urlset.")
        return self._serialize(root)

    def write_sitemapindex(self, entries: Iterable[SitemapEntry]) -> bytes:
        """2.3 Serialize sitemap references as a <sitemapindex> document."""
        root = etree.Element(f"{{{_NS}}}sitemapindex", nsmap={None: _NS})
        count = 0
        for entry in entries:
            sitemap_element = etree.SubElement(root, f"{{{_NS}}}sitemap")
            self._append_common(sitemap_element, entry.loc, entry.lastmod)
            count += 1

        logger.info(f"Wrote {count} sitemap entries to sitemap index.")
        return self._serialize(root)

    def _append_common(self, parent: etree._Element, loc, lastmod) -> None:
        url = loc.get()
        if url is None:
            # Entries only come out of a builder with a valid location
            raise ValueError(f"Cannot write an entry without a valid location (state={loc.state.value})")
        self._sub(parent, "loc", url.geturl())

        modified = lastmod.get()
        if modified is not None:
            self._sub(parent, "lastmod", format_w3c_datetime(modified))

    def _sub(self, parent: etree._Element, name: str, text: str) -> None:
        etree.SubElement(parent, f"{{{_NS}}}{name}").text = text

    def _serialize(self, root: etree._Element) -> bytes:
        return etree.tostring(
            root,
            pretty_print=self.pretty_print,
            xml_declaration=self.xml_declaration,
            encoding=self.encoding,
        )
