"""
Exception types for the sentiment signal system
"""


class SentimentSystemError(Exception):
    """Base class for errors raised by this package"""


class DecimalConversionError(SentimentSystemError, ValueError):
    """A numeric input cannot be represented as a finite decimal"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Cannot convert {value!r} to a finite Decimal")


class DataSourceError(SentimentSystemError):
    """An external data provider returned an unusable response"""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")
