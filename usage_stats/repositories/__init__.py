"""
usage_stats/repositories package marker.
"""

from usage_stats.repositories.usage_session_repository import UsageSessionRepository

__all__ = ["UsageSessionRepository"]
