"""Queryable HTML document capability used by extraction and checks.

Checks only depend on :class:`Document` and :class:`Element`; the
BeautifulSoup-backed implementation below is the one shipped.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from bs4 import BeautifulSoup, Tag


class Element(Protocol):
    def attr(self, name: str) -> Optional[str]: ...

    @property
    def text(self) -> str: ...


class Document(Protocol):
    def select(self, selector: str) -> list[Element]: ...

    def ids(self) -> set[str]: ...


class SoupElement:
    """Element view over a bs4 ``Tag``."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 returns multi-valued attributes (rel, class) as lists.
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @property
    def text(self) -> str:
        return self._tag.get_text()


class SoupDocument:
    """Document parsed with BeautifulSoup's built-in ``html.parser``."""

    def __init__(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "html.parser")

    def select(self, selector: str) -> list[Element]:
        return [SoupElement(tag) for tag in self._soup.select(selector)]

    def ids(self) -> set[str]:
        ids: set[str] = set()
        for tag in self._soup.find_all(True):
            if "id" in tag.attrs:
                ids.add(str(tag["id"]))
        return ids


def parse_document(html: str) -> Document:
    return SoupDocument(html)


def attr_values(elements: Iterable[Element], name: str) -> list[str]:
    """Collect ``name`` from every element that carries it."""

    values: list[str] = []
    for element in elements:
        value = element.attr(name)
        if value is not None:
            values.append(value)
    return values


__all__ = ["Document", "Element", "SoupDocument", "SoupElement", "attr_values", "parse_document"]
