from riverdb.country.classifier import UNKNOWN, classify, count_countries

__all__ = ["UNKNOWN", "classify", "count_countries"]
