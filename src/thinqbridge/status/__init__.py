"""Status views: typed projections over raw snapshot data."""

from thinqbridge.status.base import AirQualityData, ApplianceStatus, BaseStatus

__all__ = ["AirQualityData", "ApplianceStatus", "BaseStatus"]
