"""Web adapters."""

from nyc_transit_departures.adapters.web.rate_limit_middleware import RateLimitMiddleware
from nyc_transit_departures.adapters.web.web_adapter import DeparturesWebAdapter

__all__ = ["DeparturesWebAdapter", "RateLimitMiddleware"]
