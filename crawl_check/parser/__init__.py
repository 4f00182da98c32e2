"""crawl_check.parser: Парсеры вспомогательных форматов (sitemap.xml)."""
