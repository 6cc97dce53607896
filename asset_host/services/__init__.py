"""
Business logic services for the Asset Host API.
Services handle core operations separate from API endpoints.
"""

from asset_host.services.asset_service import AssetService, decode_base64_content
from asset_host.services.metrics import MetricsCollector, get_metrics_collector

__all__ = [
    "AssetService",
    "MetricsCollector",
    "decode_base64_content",
    "get_metrics_collector",
]
