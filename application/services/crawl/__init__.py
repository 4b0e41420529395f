from .crawl_service import CrawlService, CrawlConfig, CrawlStats

__all__ = ["CrawlService", "CrawlConfig", "CrawlStats"]
