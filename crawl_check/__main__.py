"""Позволяет запускать ``python -m crawl_check``."""
from crawl_check.cli import cli

if __name__ == "__main__":
    cli(prog_name="crawl-check")
