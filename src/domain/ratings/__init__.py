"""Rating-system domain modules."""

from domain.ratings.protocol import RatingCalculator, RatingSystem

__all__ = ["RatingCalculator", "RatingSystem"]
