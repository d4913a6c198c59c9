"""Extraction of the "Name:" field from usb-ids pages.

The usb-ids site is not under our control, so the field boundary is kept
narrow and explicit: the name starts right after the first ``Name:`` label
and stops at the next ``<`` on the same line.

Usage:
    from usbnames.domain.name_parser import extract_name

    name = extract_name(["<td>Name: FTDI</td>"])
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from lxml import etree, html

from usbnames.errors import ParseMiss


NAME_LABEL = "Name:"
TAG_START = "<"
INLINE_TAGS = {"a", "b", "em", "font", "i", "label", "span", "strong", "u"}
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def extract_name(lines: Iterable[str], url: Optional[str] = None) -> str:
    """Return the name from the first line that carries the label.

    Raises ParseMiss when no line has the label, when that line has no ``<``
    after the label, or when the name is blank.
    """

    for line in lines:
        start = line.find(NAME_LABEL)
        if start < 0:
            continue
        start += len(NAME_LABEL)
        end = line.find(TAG_START, start)
        if end < 0:
            raise ParseMiss(f"'{NAME_LABEL}' field is not terminated by '{TAG_START}'", url=url)
        return _checked(line[start:end], url)
    raise ParseMiss(f"No '{NAME_LABEL}' field found", url=url)


def extract_name_from_markup(text: str, url: Optional[str] = None) -> str:
    """Return the name from the first text node that carries the label.

    The name runs to the end of the text node's line, since tags have already
    been stripped by the HTML parser. A label that sits alone in its own
    element takes the markup right after that element: its tail text
    (``<b>Name:</b> FTDI``) or its next sibling (``<td>Name:</td><td>FTDI</td>``).
    Nothing further along the document is consulted, so an empty value cell
    is a ParseMiss.
    """

    if not text.strip():
        raise ParseMiss("Empty response body", url=url)
    try:
        tree = html.fromstring(text)
    except (etree.ParserError, ValueError) as exc:
        raise ParseMiss(f"Unparseable markup: {exc}", url=url) from exc

    for node in tree.xpath("//text()"):
        start = node.find(NAME_LABEL)
        if start < 0:
            continue
        remainder = node[start + len(NAME_LABEL):]
        if not remainder.strip():
            remainder = _text_after_label(node)
        return _checked(_first_line(remainder.lstrip()), url)
    raise ParseMiss(f"No '{NAME_LABEL}' field found", url=url)


def _text_after_label(node) -> str:
    """Return the text that directly follows a label-only text node."""

    owner = node.getparent()
    if owner is None:
        return ""
    if node.is_tail:
        return _text_of(owner.getnext())
    if len(owner):
        return _text_of(owner[0])

    # Step out of inline wrappers such as <td><b>Name:</b></td>.
    element = owner
    while (
        element.tag in INLINE_TAGS
        and element.getnext() is None
        and not (element.tail or "").strip()
        and element.getparent() is not None
    ):
        element = element.getparent()
    if (element.tail or "").strip():
        return element.tail
    return _text_of(element.getnext())


def _text_of(element) -> str:
    if element is None:
        return ""
    return element.text_content()


def _checked(name: str, url: Optional[str]) -> str:
    name = name.strip()
    if not name:
        raise ParseMiss(f"'{NAME_LABEL}' field is empty", url=url)
    return name


def split_lines(text: str) -> List[str]:
    """Split on CR, LF and CRLF only.

    str.splitlines also breaks on form feeds, vertical tabs and Unicode
    separators, which may legitimately appear inside a name line.
    """

    return LINE_BREAK.split(text)


def _first_line(text: str) -> str:
    return split_lines(text)[0]
