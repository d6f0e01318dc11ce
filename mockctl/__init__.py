"""Building blocks for expectation-based mocking: matchers, reporters and naming helpers."""

__version__ = "0.1.0"

__all__ = ["matchers", "naming", "packages", "reporter"]