"""
1.0 Sitemap Reader Module
Parses urlset and sitemap index XML into UrlEntry / SitemapEntry records.

Entries without a valid <loc> are skipped and counted; other bad field
values are kept on the entry as invalid variants.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union, Any

from lxml import etree  # Using lxml for robust parsing and namespace handling

from sitemap_model.config import merge_config
from sitemap_model.entries import SitemapEntry, UrlEntry
from sitemap_model.errors import InvalidEntryError

logger = logging.getLogger(__name__)

# Common sitemap namespaces
SITEMAP_NS = {
    'sm': 'http://www.sitemaps.org/schemas/sitemap/0.9',
}

URLSET = "urlset"
SITEMAPINDEX = "sitemapindex"
ERROR = "error"


@dataclass
class ParseResult:
    """Outcome of reading one sitemap document."""
    type: str
    entries: List[Union[UrlEntry, SitemapEntry]] = field(default_factory=list)
    skipped: int = 0
    error_message: Optional[str] = None


class SitemapReader:
    """
    Reads a urlset or sitemap index into UrlEntry / SitemapEntry records.

    Every child element's text goes through the entry builder, so malformed
    optional fields survive as invalid values on the entry. Entries whose
    <loc> is missing or unparseable are skipped and counted.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        options = merge_config(config)["reader"]
        self.recover = options["recover"]
        self.huge_tree = options["huge_tree"]
        logger.info(f"SitemapReader initialized (recover={self.recover}).")

    def parse_sitemap(self, xml_content: Union[str, bytes], sitemap_url: str = "") -> ParseResult:
        """
        Parses the given XML sitemap content.

        Determines if it's a sitemap index or a URL set and builds entries.

        Args:
            xml_content: The XML content of the sitemap.
            sitemap_url: The URL from which this sitemap was fetched (for logging/context).

        Returns:
            A ParseResult; type is 'urlset', 'sitemapindex' or 'error'.
        """
        if isinstance(xml_content, str):
            # lxml refuses str input carrying an encoding declaration
            xml_content = xml_content.strip().encode('utf-8')

        if not xml_content:
            logger.error(f"Cannot parse empty XML content (from {sitemap_url}).")
            return ParseResult(ERROR, error_message="Empty XML content")

        try:
            parser = etree.XMLParser(recover=self.recover, remove_blank_text=True,
                                     huge_tree=self.huge_tree, resolve_entities=False)
            root = etree.fromstring(xml_content, parser=parser)
        except etree.XMLSyntaxError as e:
            logger.error(f"XML syntax error while parsing sitemap from {sitemap_url}: {e}")
            return ParseResult(ERROR, error_message=f"XMLSyntaxError: {e}")

        if root is None:
            msg = f"No XML document could be recovered from {sitemap_url}."
            logger.error(msg)
            return ParseResult(ERROR, error_message=msg)

        root_tag_name = etree.QName(root.tag).localname

        if root_tag_name == SITEMAPINDEX:
            logger.info(f"Parsing as sitemap index: {sitemap_url}")
            return self._read_sitemap_index(root)
        elif root_tag_name == URLSET:
            logger.info(f"Parsing as URL set: {sitemap_url}")
            return self._read_urlset(root)

        logger.warning(
            f"Unknown root tag '{root.tag}' in sitemap from {sitemap_url}. Attempting to find URLs."
        )
        # Fallback: try to find sitemap or url tags anyway
        if root.xpath('//sm:sitemap', namespaces=SITEMAP_NS):
            result = self._read_sitemap_index(root)
            result.error_message = "Unknown root, but sitemap tags found"
            return result
        elif root.xpath('//sm:url', namespaces=SITEMAP_NS):
            result = self._read_urlset(root)
            result.error_message = "Unknown root, but url tags found"
            return result

        msg = f"Unknown root element '{root.tag}' and no sitemap/url tags found in {sitemap_url}."
        logger.error(msg)
        return ParseResult(ERROR, error_message=msg)

    def _child_texts(self, element: etree._Element) -> List[tuple]:
        """(localname, stripped text) for each namespaced child, in document order."""
        texts = []
        for child in element:
            if not isinstance(child.tag, str):
                continue  # comments, processing instructions
            qname = etree.QName(child)
            if qname.namespace not in (None, SITEMAP_NS['sm']):
                continue  # image:, news:, video: extensions
            texts.append((qname.localname, (child.text or "").strip()))
        return texts

    def _read_urlset(self, root_element: etree._Element) -> ParseResult:
        """Builds a UrlEntry for every <url> element."""
        result = ParseResult(URLSET)
        for url_element in self._find(root_element, 'url'):
            builder = UrlEntry.builder()
            for name, text in self._child_texts(url_element):
                if name == 'loc':
                    builder.set_location(text)
                elif not text:
                    continue  # empty optional element counts as absent
                elif name == 'lastmod':
                    builder.set_lastmod_text(text)
                elif name == 'changefreq':
                    builder.set_change_frequency_text(text)
                elif name == 'priority':
                    builder.set_priority_text(text)
            self._finish(builder, url_element, result)
        logger.debug(f"Extracted {len(result.entries)} URL entries from urlset ({result.skipped} skipped).")
        return result

    def _read_sitemap_index(self, root_element: etree._Element) -> ParseResult:
        """Builds a SitemapEntry for every <sitemap> element."""
        result = ParseResult(SITEMAPINDEX)
        for sitemap_element in self._find(root_element, 'sitemap'):
            builder = SitemapEntry.builder()
            for name, text in self._child_texts(sitemap_element):
                if name == 'loc':
                    builder.set_location(text)
                elif name == 'lastmod' and text:
                    builder.set_lastmod_text(text)
            self._finish(builder, sitemap_element, result)
        logger.debug(f"Extracted {len(result.entries)} sitemap links from index ({result.skipped} skipped).")
        return result

    def _find(self, root_element: etree._Element, localname: str) -> List[etree._Element]:
        # Namespaced per the protocol, but plenty of sitemaps in the wild omit xmlns
        found = root_element.xpath(f'//sm:{localname}', namespaces=SITEMAP_NS)
        if not found:
            found = root_element.xpath(f'//{localname}')
        return found

    def _finish(self, builder, element: etree._Element, result: ParseResult) -> None:
        try:
            entry = builder.finish()
        except InvalidEntryError as e:
            # An entry without a usable <loc> is invalid according to sitemap protocol, skip it.
            context = etree.tostring(element).decode().strip()[:200]
            logger.warning(f"Skipping entry: {e}. Context: {context}")
            result.skipped += 1
            return
        invalid = entry.invalid_fields()
        if invalid:
            logger.debug(f"Entry {entry.loc.get().geturl()} has invalid fields: {invalid}")
        result.entries.append(entry)
