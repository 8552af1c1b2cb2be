"""IGT Beverage-on-Demand to Acres 4 Kai call bridge."""

__version__ = "1.0.0"
