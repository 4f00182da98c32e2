# File: crawl_check/parser/sitemap_parser.py
"""crawl_check.parser.sitemap_parser: Извлечение URL из sitemap.xml."""

from __future__ import annotations

from typing import List, Union

from lxml import etree


def parse_sitemap(xml_content: Union[str, bytes]) -> List[str]:
    """Возвращает текст всех тегов <loc> (в порядке документа).

    Пространства имён игнорируются, повреждённый XML разбирается в режиме
    recover. Пустой или неразборчивый ввод даёт пустой список.

    Пример:
    ```python
    from crawl_check.parser.sitemap_parser import parse_sitemap

    urls = parse_sitemap(Path('sitemap.xml').read_bytes())
    ```
    """
    if isinstance(xml_content, str):
        xml_content = xml_content.encode("utf-8")
    if not xml_content.strip():
        return []
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml_content, parser=parser)
    except etree.XMLSyntaxError:
        return []
    if root is None:
        return []
    return [loc.text.strip() for loc in root.iterfind(".//{*}loc") if loc.text and loc.text.strip()]


__all__ = ["parse_sitemap"]
