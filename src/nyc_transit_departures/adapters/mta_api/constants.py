"""Constants for the MTA GTFS-realtime subway feeds."""

MTA_FEED_BASE_URL = "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2F"

FEED_URLS: dict[str, str] = {
    "gtfs": f"{MTA_FEED_BASE_URL}gtfs",
    "gtfs-ace": f"{MTA_FEED_BASE_URL}gtfs-ace",
    "gtfs-bdfm": f"{MTA_FEED_BASE_URL}gtfs-bdfm",
    "gtfs-g": f"{MTA_FEED_BASE_URL}gtfs-g",
    "gtfs-jz": f"{MTA_FEED_BASE_URL}gtfs-jz",
    "gtfs-nqrw": f"{MTA_FEED_BASE_URL}gtfs-nqrw",
    "gtfs-l": f"{MTA_FEED_BASE_URL}gtfs-l",
    "gtfs-si": f"{MTA_FEED_BASE_URL}gtfs-si",
}

# Daytime route (as listed in the station directory) -> feeds carrying its trips.
# "S" covers all three shuttles, which live in different feeds.
ROUTE_FEEDS: dict[str, tuple[str, ...]] = {
    **{route: ("gtfs",) for route in ("1", "2", "3", "4", "5", "6", "6X", "7", "7X", "GS")},
    **{route: ("gtfs-ace",) for route in ("A", "C", "E", "H", "FS")},
    **{route: ("gtfs-bdfm",) for route in ("B", "D", "F", "FX", "M")},
    "G": ("gtfs-g",),
    **{route: ("gtfs-jz",) for route in ("J", "Z")},
    **{route: ("gtfs-nqrw",) for route in ("N", "Q", "R", "W")},
    "L": ("gtfs-l",),
    "SIR": ("gtfs-si",),
    "SI": ("gtfs-si",),
    "S": ("gtfs", "gtfs-ace"),
}

API_KEY_HEADER = "x-api-key"
