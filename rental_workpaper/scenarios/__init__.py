"""Scenarios for generating sample rental portfolios."""

from rental_workpaper.scenarios.portfolio import SamplePortfolioScenario

__all__ = ["SamplePortfolioScenario"]
