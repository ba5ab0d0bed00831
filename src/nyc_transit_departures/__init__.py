"""NYC transit departures - real-time subway departure aggregation."""

__version__ = "0.1.0"
