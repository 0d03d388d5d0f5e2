# shiftgen/data - Data layer contracts, cache and request tracking
from .cache import TTLCache
from .requests import RequestGeneration, RequestToken
from .sources import InMemoryStore, ReferenceData, ShiftSink, ShiftSource, TemplateSource

__all__ = [
    "TTLCache",
    "RequestGeneration", "RequestToken",
    "InMemoryStore", "TemplateSource", "ShiftSource", "ShiftSink", "ReferenceData",
]
