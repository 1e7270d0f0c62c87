"""
Competitor model: zero-sum market-share pool shared between the business
and its competitors. As the business grows past its 5% foothold, competitors
lose share in proportion to their weight, never below the 1% floor.
"""

import logging
from dataclasses import replace
from typing import List

from startup_sim.simulation_layer.errors import warn_degenerate
from startup_sim.simulation_layer.models import Competitor
from startup_sim.simulation_layer.stat_rules import COMPETITOR_SHARE_FLOOR

logger = logging.getLogger(__name__)

FOOTHOLD_SHARE = 0.05
SHARE_TOLERANCE = 1e-6


class CompetitorModel:
    """Redistributes competitor shares after the business's share changes."""

    def __init__(self, floor: float = COMPETITOR_SHARE_FLOOR, foothold: float = FOOTHOLD_SHARE):
        self.floor = floor
        self.foothold = foothold

    def rebalance(self, business_share: float, competitors: List[Competitor]) -> List[Competitor]:
        """Return updated copies whose shares sum to 1 - business_share."""
        if not competitors:
            warn_degenerate("No competitors remain in the market-share pool")
            return []

        shares = [c.market_share for c in competitors]

        if business_share > self.foothold:
            gain = business_share - self.foothold
            shares = self._distribute_loss(shares, gain)

        target = max(0.0, 1.0 - business_share)
        shares = self._renormalize(shares, target)

        logger.debug(
            "Competitor shares rebalanced to %s (business %.4f)",
            [round(s, 4) for s in shares], business_share,
        )
        return [replace(c, market_share=s) for c, s in zip(competitors, shares)]

    def _distribute_loss(self, shares: List[float], gain: float) -> List[float]:
        total = sum(shares)
        if total <= 0:
            # Pool exhausted: split the loss evenly
            per_competitor = gain / len(shares)
            return [max(self.floor, s - per_competitor) for s in shares]
        return [max(self.floor, s - gain * (s / total)) for s in shares]

    def _renormalize(self, shares: List[float], target: float) -> List[float]:
        """Scale shares to sum to target while keeping each at or above the floor."""
        n = len(shares)
        if target < self.floor * n - SHARE_TOLERANCE:
            warn_degenerate(
                f"Competitor pool {target:.4f} cannot keep {n} competitors at the "
                f"{self.floor:.2f} floor; splitting evenly"
            )
            return [target / n] * n

        pinned = [False] * n
        result = list(shares)
        while True:
            free_idx = [i for i in range(n) if not pinned[i]]
            remaining = target - self.floor * (n - len(free_idx))
            free_total = sum(shares[i] for i in free_idx)

            for i in range(n):
                if pinned[i]:
                    result[i] = self.floor
            if not free_idx:
                break

            if free_total <= 0:
                for i in free_idx:
                    result[i] = remaining / len(free_idx)
            else:
                for i in free_idx:
                    result[i] = shares[i] / free_total * remaining

            newly_pinned = [i for i in free_idx if result[i] < self.floor - SHARE_TOLERANCE]
            if not newly_pinned:
                break
            for i in newly_pinned:
                pinned[i] = True
        return result


def pool_total(business_share: float, competitors: List[Competitor]) -> float:
    return business_share + sum(c.market_share for c in competitors)
