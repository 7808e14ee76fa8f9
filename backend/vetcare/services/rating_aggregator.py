"""Module: rating_aggregator."""

from collections.abc import Iterable
from decimal import ROUND_HALF_EVEN, Decimal

from loguru import logger

from vetcare.core.errors import NotFound
from vetcare.db.models.account import Account
from vetcare.db.models.professional import Professional
from vetcare.db.models.rating import Rating
from vetcare.repositories.profiles import ProfileRepository

RATING_QUANTUM = Decimal("0.01")


def mean_rating(scores: Iterable[int]) -> Decimal | None:
    """Arithmetic mean rounded half-even to two decimals; None for no scores."""
    values = [Decimal(score) for score in scores]
    if not values:
        return None
    return (sum(values) / Decimal(len(values))).quantize(RATING_QUANTUM, rounding=ROUND_HALF_EVEN)


class RatingAggregator:
    """Keeps ``Professional.rating`` equal to the mean of its stored ratings."""

    def __init__(self, repository: ProfileRepository):
        self.repository = repository

    def _refresh(self, professional: Professional) -> int:
        ratings = self.repository.ratings_for(professional.id)
        professional.rating = mean_rating(rating.score for rating in ratings)
        return len(ratings)

    def recompute(self, professional_id: int) -> Decimal | None:
        professional = self.repository.lock_professional(professional_id)
        if professional is None:
            # Nothing to maintain; callers are not told about the miss.
            logger.warning(f"Rating recompute skipped: professional {professional_id} does not exist")
            self.repository.commit()
            return None

        try:
            count = self._refresh(professional)
        except Exception:
            self.repository.rollback()
            raise
        self.repository.save(professional)

        logger.debug(f"Professional {professional_id} rating={professional.rating} over {count} ratings")
        return professional.rating

    def record(self, professional_id: int, score: int, author_id: int | None = None) -> Rating:
        """Store a rating and the refreshed mean in a single transaction."""
        # Row lock is taken before the insert.
        professional = self.repository.lock_professional(professional_id)
        if professional is None:
            self.repository.rollback()
            raise NotFound(f"Professional {professional_id} not found")

        try:
            if author_id is not None and self.repository.find_by_id(Account, author_id) is None:
                raise NotFound(f"Account {author_id} not found")

            rating = Rating(score=score, professional_id=professional_id, author_id=author_id)
            self.repository.add_rating(rating)
            self._refresh(professional)
        except Exception:
            self.repository.rollback()
            raise
        self.repository.save(professional)

        logger.info(f"Recorded rating {rating.id} for professional {professional_id}, rating={professional.rating}")
        return rating
