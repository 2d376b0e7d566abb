"""Entity package: NewsRelease."""

from .entity import NewsRelease
from .repository import NewsReleaseRepository
from .table import NewsReleaseTable

__all__ = ["NewsRelease", "NewsReleaseRepository", "NewsReleaseTable"]
