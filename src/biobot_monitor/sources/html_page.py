from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser

_WHITESPACE = re.compile(r"\s+")
_BLOCK_TAGS = {
    "br", "p", "div", "li", "ul", "ol", "tr", "td", "th", "table",
    "h1", "h2", "h3", "h4", "h5", "h6", "section", "article", "header", "footer",
}
_SKIP_TAGS = {"script", "style", "title", "noscript", "template"}


@dataclass(slots=True)
class PageContent:
    text: str
    links: list[str] = field(default_factory=list)


class _VisibleTextParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.chunks: list[str] = []
        self.links: list[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag == "body":
            self._skip_depth = 0
        if tag in _SKIP_TAGS:
            self._skip_depth += 1
            return
        if self._skip_depth:
            return
        if tag == "a":
            for name, value in attrs:
                if name == "href" and value:
                    self.links.append(value.strip())
        if tag in _BLOCK_TAGS:
            self.chunks.append("\n")

    def handle_startendtag(self, tag, attrs):
        self.handle_starttag(tag, attrs)
        if tag in _SKIP_TAGS:
            self._skip_depth -= 1

    def handle_endtag(self, tag):
        if tag in _SKIP_TAGS:
            self._skip_depth = max(0, self._skip_depth - 1)
            return
        if tag in _BLOCK_TAGS:
            self.chunks.append("\n")

    def handle_data(self, data):
        if not self._skip_depth:
            self.chunks.append(_WHITESPACE.sub(" ", data))


def parse_page(html: str) -> PageContent:
    """Return the visible text and the ``<a href>`` targets of a page, in document order."""
    parser = _VisibleTextParser()
    parser.feed(html)
    parser.close()

    lines = []
    for line in "".join(parser.chunks).splitlines():
        normalized = _WHITESPACE.sub(" ", line).strip()
        if normalized:
            lines.append(normalized)
    return PageContent(text="\n".join(lines), links=parser.links)
