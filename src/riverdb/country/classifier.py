"""
Coarse country lookup from coordinates.

Points are matched against rectangular bounding boxes: first the region
box, then the country boxes listed under that region, in the order they
appear. The first country box that contains the point wins. A point that
lies in a region box but in none of its countries is tried against the
following regions, so overlapping regions (Europe/Asia around the
Bosporus, Africa/Asia around Suez) still resolve. Anything else is
"Unknown".

The boxes are intentionally rough and only feed aggregate counts. Where
two boxes overlap, the earlier entry decides, so smaller countries are
listed before the larger neighbours whose boxes swallow them.
"""

import math
from dataclasses import dataclass

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_lat <= latitude <= self.max_lat
            and self.min_lng <= longitude <= self.max_lng
        )


@dataclass(frozen=True)
class Region:
    name: str
    box: BoundingBox
    countries: tuple[tuple[str, BoundingBox], ...]


def _box(min_lat, max_lat, min_lng, max_lng) -> BoundingBox:
    return BoundingBox(min_lat, max_lat, min_lng, max_lng)


REGIONS: tuple[Region, ...] = (
    Region(
        "Europe",
        _box(34.0, 72.0, -25.0, 45.0),
        (
            # Germany is split where its neighbours' boxes reach across the border
            ("Germany", _box(49.25, 51.8, 6.5, 8.3)),
            ("Germany", _box(47.8, 54.8, 8.3, 12.1)),
            ("Germany", _box(50.95, 54.8, 12.1, 14.1)),
            ("Netherlands", _box(50.75, 53.7, 3.3, 7.2)),
            ("Belgium", _box(49.5, 51.5, 2.5, 6.4)),
            ("Switzerland", _box(45.8, 47.8, 5.9, 10.5)),
            ("Austria", _box(46.4, 49.0, 9.5, 17.2)),
            ("Czech Republic", _box(48.5, 51.1, 12.1, 18.9)),
            ("Denmark", _box(54.5, 57.8, 8.0, 15.2)),
            ("France", _box(47.4, 49.15, 5.87, 7.8)),
            ("Germany", _box(47.27, 55.06, 5.87, 15.04)),
            ("Poland", _box(49.0, 54.9, 14.1, 24.2)),
            ("France", _box(42.3, 51.1, -5.2, 8.3)),
            ("Portugal", _box(36.9, 42.2, -9.6, -6.2)),
            ("Spain", _box(36.0, 43.8, -9.3, 3.3)),
            ("Italy", _box(36.6, 47.1, 6.6, 18.5)),
            ("Ireland", _box(51.4, 55.4, -10.5, -6.0)),
            ("United Kingdom", _box(49.9, 60.9, -8.2, 1.8)),
            ("Sweden", _box(55.3, 69.1, 11.1, 24.2)),
            ("Finland", _box(59.8, 70.1, 20.5, 31.6)),
            ("Norway", _box(58.0, 71.2, 4.5, 31.1)),
            ("Hungary", _box(45.7, 48.6, 16.1, 22.9)),
            ("Romania", _box(43.6, 48.3, 20.2, 29.7)),
            ("Greece", _box(34.8, 41.8, 19.4, 28.3)),
            ("Ukraine", _box(44.4, 52.4, 22.1, 40.2)),
        ),
    ),
    Region(
        "Africa",
        _box(-35.0, 37.5, -18.0, 52.0),
        (
            ("Egypt", _box(22.0, 31.7, 24.7, 34.2)),
            ("Egypt", _box(27.7, 29.4, 32.6, 34.9)),
            ("Morocco", _box(27.6, 35.9, -13.2, -1.0)),
            ("Ghana", _box(4.7, 11.2, -3.3, 1.2)),
            ("Nigeria", _box(4.2, 13.9, 2.7, 14.7)),
            ("Ethiopia", _box(3.4, 14.9, 33.0, 48.0)),
            ("Kenya", _box(-4.7, 5.0, 33.9, 41.9)),
            ("Tanzania", _box(-11.8, -1.0, 29.3, 40.5)),
            ("South Africa", _box(-34.9, -22.1, 16.4, 32.9)),
        ),
    ),
    Region(
        "North America",
        _box(7.0, 84.0, -170.0, -50.0),
        (
            ("Canada", _box(49.0, 83.1, -141.0, -52.6)),
            ("Canada", _box(45.0, 49.0, -80.5, -64.0)),
            ("Canada", _box(43.5, 45.0, -80.5, -76.3)),
            ("Canada", _box(43.4, 47.1, -66.4, -59.7)),
            ("United States", _box(24.5, 49.0, -125.0, -66.9)),
            ("United States", _box(51.0, 71.5, -170.0, -141.0)),
            ("Mexico", _box(14.5, 32.7, -118.4, -86.7)),
            ("Costa Rica", _box(8.0, 11.2, -86.0, -82.5)),
        ),
    ),
    Region(
        "South America",
        _box(-56.0, 13.0, -82.0, -34.0),
        (
            ("Ecuador", _box(-5.0, 1.5, -81.1, -75.2)),
            ("Venezuela", _box(0.6, 12.2, -73.4, -59.8)),
            ("Colombia", _box(-4.2, 12.5, -79.0, -66.9)),
            ("Peru", _box(-18.4, 0.0, -81.4, -68.7)),
            ("Chile", _box(-56.0, -17.5, -75.7, -66.4)),
            ("Uruguay", _box(-35.0, -30.1, -58.3, -53.1)),
            ("Argentina", _box(-55.1, -21.8, -73.6, -53.6)),
            ("Brazil", _box(-33.8, 5.3, -74.0, -34.8)),
        ),
    ),
    Region(
        "Asia",
        _box(-11.0, 77.0, 25.0, 180.0),
        (
            ("Israel", _box(29.5, 33.3, 34.2, 35.9)),
            ("Turkey", _box(36.0, 42.1, 26.0, 44.8)),
            ("South Korea", _box(33.1, 38.6, 124.6, 131.9)),
            ("Japan", _box(24.0, 45.6, 122.9, 146.0)),
            ("Bangladesh", _box(20.7, 26.6, 88.0, 92.7)),
            ("Vietnam", _box(8.4, 23.4, 102.1, 109.5)),
            ("Thailand", _box(5.6, 20.5, 97.3, 105.6)),
            ("Philippines", _box(4.6, 21.1, 116.9, 126.6)),
            ("India", _box(6.7, 35.5, 68.1, 97.4)),
            ("China", _box(18.2, 53.6, 73.5, 134.8)),
            ("Indonesia", _box(-11.0, 6.0, 95.0, 141.0)),
            ("Russia", _box(41.2, 77.7, 27.3, 180.0)),
        ),
    ),
    Region(
        "Oceania",
        _box(-48.0, 0.0, 110.0, 180.0),
        (
            ("New Zealand", _box(-47.5, -34.0, 166.0, 178.6)),
            ("Australia", _box(-43.7, -10.6, 113.0, 153.7)),
        ),
    ),
)


def classify(latitude, longitude) -> str:
    """Country label for a point, or "Unknown". Never raises."""
    try:
        latitude = float(latitude)
        longitude = float(longitude)
    except (TypeError, ValueError):
        return UNKNOWN
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return UNKNOWN

    for region in REGIONS:
        if not region.box.contains(latitude, longitude):
            continue
        for country, box in region.countries:
            if box.contains(latitude, longitude):
                return country
    return UNKNOWN


def count_countries(locations) -> int:
    """
    Number of distinct known countries in a DataFrame with latitude and
    longitude columns.
    """
    if locations.empty:
        return 0
    labels = locations.apply(lambda row: classify(row["latitude"], row["longitude"]), axis=1)
    return int(labels[labels != UNKNOWN].nunique())
