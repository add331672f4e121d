"""Fuel-cost route planner over stored road maps."""
