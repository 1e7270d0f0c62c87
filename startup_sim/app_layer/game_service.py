"""
Game service: reads state from the repository, runs the simulation layer,
and commits every record of a transition together.
"""

import logging
import threading
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from config import Settings, get_settings
from startup_sim.data_layer.game_repository import GameRepository, RecordNotFoundError
from startup_sim.simulation_layer.advisory_rules import AdvisoryRules
from startup_sim.simulation_layer.company_setup import SetupResult, create_company
from startup_sim.simulation_layer.competitor_model import CompetitorModel
from startup_sim.simulation_layer.decision_catalog import DecisionCatalog
from startup_sim.simulation_layer.event_rules import roll_market_shock
from startup_sim.simulation_layer.impact_resolver import apply_catalog_decisions, resolve_decision
from startup_sim.simulation_layer.models import (
    BusinessState,
    CatalogDecision,
    Decision,
    Event,
)
from startup_sim.simulation_layer.quarter_advancer import (
    AdvanceResult,
    QuarterAdvancer,
    build_financial_record,
)
from startup_sim.simulation_layer.randomness import RandomSource, SeededRandom

logger = logging.getLogger(__name__)


class GameService:
    """One instance per process. Transitions for the same business run one at a time."""

    def __init__(
        self,
        repository: GameRepository,
        settings: Optional[Settings] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.repository = repository
        self.settings = settings or get_settings()
        sim = self.settings.simulation

        self.rng = rng or SeededRandom(sim.seed)
        self.advancer = QuarterAdvancer.from_settings(self.settings)
        self.competitor_model = CompetitorModel()
        self.decision_catalog = DecisionCatalog(crisis_probability=sim.crisis_decision_probability)
        self.advisory_rules = AdvisoryRules(min_items=sim.advice_min_items, max_items=sim.advice_max_items)

        self._locks: Dict[int, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock_for(self, business_id: int) -> threading.Lock:
        with self._locks_guard:
            return self._locks[business_id]

    # --- Setup ---

    def create_company(self, user_id: int, name: str, business_type, funding_type) -> SetupResult:
        result = create_company(
            user_id, name, business_type, funding_type, self.rng,
            shock_probability=self.settings.simulation.setup_event_probability,
            decision_catalog=self.decision_catalog,
            advisory_rules=self.advisory_rules,
        )
        business = self.repository.create_business(result.business)
        committed = self.repository.commit_transition(
            business,
            competitors=result.competitors,
            decisions=result.decisions,
            events=result.events,
            advice=result.advice,
            financial_record=result.financial_record,
        )
        return SetupResult(
            business=committed.business,
            competitors=committed.competitors,
            decisions=committed.decisions,
            advice=committed.advice,
            financial_record=committed.financial_record,
            events=committed.events,
        )

    # --- Reads ---

    def get_business(self, business_id: int) -> BusinessState:
        return self.repository.get_business(business_id)

    def get_decision(self, business_id: int, decision_id: int) -> Decision:
        decision = self.repository.get_decision(decision_id)
        if decision.business_id != business_id:
            raise RecordNotFoundError("Decision", decision_id)
        return decision

    # --- Transitions ---

    def advance(self, business_id: int, selections: Optional[Dict[int, int]] = None) -> AdvanceResult:
        """Advance one quarter, first resolving {decision_id: option_id} selections."""
        with self._lock_for(business_id):
            business = self.repository.get_business(business_id)
            competitors = self.repository.get_competitors(business_id)
            pending = [
                (self.get_decision(business_id, decision_id), option_id)
                for decision_id, option_id in (selections or {}).items()
            ]

            result = self.advancer.advance(business, competitors, self.rng, pending=pending)
            committed = self.repository.commit_transition(
                result.business,
                competitors=result.competitors,
                decisions=result.decisions,
                updated_decisions=result.resolved_decisions,
                events=result.events,
                advice=result.advice,
                financial_record=result.financial_record,
            )
            return AdvanceResult(
                business=committed.business,
                financial_record=committed.financial_record,
                events=committed.events,
                decisions=committed.decisions,
                advice=committed.advice,
                competitors=committed.competitors,
                resolved_decisions=committed.updated_decisions,
            )

    def resolve_decision(self, business_id: int, decision_id: int,
                         option_id: int) -> Tuple[BusinessState, Decision, Event]:
        with self._lock_for(business_id):
            business = self.repository.get_business(business_id)
            decision = self.get_decision(business_id, decision_id)

            updated, completed, event = resolve_decision(business, decision, option_id)
            committed = self.repository.commit_transition(updated, updated_decisions=[completed], events=[event])
            return committed.business, committed.updated_decisions[0], committed.events[0]

    def submit_catalog_decisions(
        self, business_id: int, choices: Iterable[Tuple[str, str]]
    ) -> Tuple[BusinessState, List[CatalogDecision], List[Event]]:
        """
        Bulk catalog submission. Competitors are rebalanced against the new
        share and the resulting quarter is recorded.
        """
        with self._lock_for(business_id):
            business = self.repository.get_business(business_id)
            competitors = self.repository.get_competitors(business_id)

            updated, records = apply_catalog_decisions(business, list(choices), competitor_count=len(competitors))
            rebalanced = self.competitor_model.rebalance(updated.market_share, competitors)

            events = []
            shock = roll_market_shock(updated, self.rng, self.settings.simulation.setup_event_probability)
            if shock is not None:
                events.append(shock)

            committed = self.repository.commit_transition(
                updated,
                competitors=rebalanced,
                events=events,
                financial_record=build_financial_record(updated),
                catalog_decisions=records,
            )
            return committed.business, committed.catalog_decisions, committed.events

    def resolve_event(self, event_id: int) -> Event:
        event = self.repository.resolve_event(event_id)
        logger.info("Event %d '%s' resolved", event_id, event.title)
        return event
