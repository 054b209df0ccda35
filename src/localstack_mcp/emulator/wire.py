"""
wire.py - LocalStack wire-format helpers

S3, SQS and SNS answer in the AWS query/REST XML formats. These helpers parse
the body with namespaces removed so callers can use plain tag names.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Optional


def _strip_namespaces(root: ET.Element) -> ET.Element:
    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]
    return root


def parse_xml(text: str) -> ET.Element:
    """Parse an XML response body. Raises ET.ParseError on malformed input."""
    return _strip_namespaces(ET.fromstring(text))


def find_text(elem: ET.Element, path: str, default: Optional[str] = None) -> Optional[str]:
    node = elem.find(path)
    if node is None or node.text is None:
        return default
    return node.text.strip()


def find_all_text(elem: ET.Element, path: str) -> list[str]:
    """Text of every element matching path (relative, './/'-style allowed)."""
    return [node.text.strip() for node in elem.findall(path) if node.text]


__all__ = ["parse_xml", "find_text", "find_all_text"]
