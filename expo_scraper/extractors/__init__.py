from expo_scraper.extractors.base import ExtractionAdapter, RecordCollector
from expo_scraper.extractors.classifier import classify
from expo_scraper.extractors.registry import ADAPTERS, get_adapter

__all__ = ["ADAPTERS", "ExtractionAdapter", "RecordCollector", "classify", "get_adapter"]
