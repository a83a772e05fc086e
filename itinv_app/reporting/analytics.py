"""Spend, location and age breakdowns for the reporting views."""

from datetime import date
from typing import Iterable, Optional

from ..config.defaults import ReportingParams
from ..state.models import Device, Repair
from ..utils.time import resolve_as_of, years_between

AGE_UNDER_ONE = "< 1 Year"
AGE_ONE_TO_THREE = "1-3 Years"
AGE_THREE_TO_FIVE = "3-5 Years"
AGE_OVER_FIVE = "> 5 Years"


def capex_by_category(devices: Iterable[Device]) -> dict[str, float]:
    """Total device cost per device category, in first-seen order."""
    costs: dict[str, float] = {}
    for device in devices:
        costs[device.category] = costs.get(device.category, 0.0) + device.cost
    return costs


def opex_by_category(repairs: Iterable[Repair]) -> dict[str, float]:
    """Total repair cost per repair category, skipping uncategorized repairs."""
    costs: dict[str, float] = {}
    for repair in repairs:
        if repair.category:
            costs[repair.category] = costs.get(repair.category, 0.0) + repair.cost
    return costs


def devices_by_location(devices: Iterable[Device]) -> list[tuple[str, int]]:
    """Device counts per location, busiest location first."""
    counts: dict[str, int] = {}
    for device in devices:
        if device.location:
            counts[device.location] = counts.get(device.location, 0) + 1
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def device_age_buckets(
    devices: Iterable[Device],
    as_of: Optional[date] = None,
    params: Optional[ReportingParams] = None
) -> dict[str, int]:
    """
    Count devices per age group based on purchase date.

    The first bucket is exclusive (age < 1 year); the others include their
    upper bound.
    """
    params = params or ReportingParams()
    as_of = resolve_as_of(as_of)

    buckets = {
        AGE_UNDER_ONE: 0,
        AGE_ONE_TO_THREE: 0,
        AGE_THREE_TO_FIVE: 0,
        AGE_OVER_FIVE: 0,
    }

    for device in devices:
        age = years_between(device.purchase_date, as_of)
        if age < params.age_new_years:
            buckets[AGE_UNDER_ONE] += 1
        elif age <= params.age_mid_years:
            buckets[AGE_ONE_TO_THREE] += 1
        elif age <= params.age_old_years:
            buckets[AGE_THREE_TO_FIVE] += 1
        else:
            buckets[AGE_OVER_FIVE] += 1

    return buckets
