"""crawl_check.crawler: URL filtering, seed discovery, browser launch and the crawl loop."""
