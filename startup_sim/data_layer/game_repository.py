"""
Game data repository.
Current: in-memory dicts. A database-backed repository implements the same ABC.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from itertools import count
from typing import Dict, Iterable, List, Optional

from startup_sim.simulation_layer.models import (
    AdviceItem,
    BusinessState,
    CatalogDecision,
    Competitor,
    Decision,
    Event,
    FinancialRecord,
)


class RecordNotFoundError(LookupError):
    """No record with the requested id."""

    def __init__(self, kind: str, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


@dataclass
class CommittedTransition:
    """Stored copies, with ids, of everything one transition wrote."""

    business: BusinessState
    competitors: List[Competitor] = field(default_factory=list)
    decisions: List[Decision] = field(default_factory=list)
    updated_decisions: List[Decision] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    advice: List[AdviceItem] = field(default_factory=list)
    financial_record: Optional[FinancialRecord] = None
    catalog_decisions: List[CatalogDecision] = field(default_factory=list)


class GameRepository(ABC):
    """Abstract base for game state access."""

    @abstractmethod
    def create_business(self, business: BusinessState) -> BusinessState:
        ...

    @abstractmethod
    def get_business(self, business_id: int) -> BusinessState:
        ...

    @abstractmethod
    def list_businesses(self) -> List[BusinessState]:
        ...

    @abstractmethod
    def update_business(self, business: BusinessState) -> BusinessState:
        ...

    @abstractmethod
    def get_competitors(self, business_id: int) -> List[Competitor]:
        ...

    @abstractmethod
    def save_competitors(self, business_id: int, competitors: Iterable[Competitor]) -> List[Competitor]:
        """Insert new competitors, overwrite those with an id."""
        ...

    @abstractmethod
    def get_decision(self, decision_id: int) -> Decision:
        ...

    @abstractmethod
    def get_decisions(self, business_id: int, pending_only: bool = False) -> List[Decision]:
        ...

    @abstractmethod
    def add_decisions(self, decisions: Iterable[Decision]) -> List[Decision]:
        ...

    @abstractmethod
    def update_decision(self, decision: Decision) -> Decision:
        ...

    @abstractmethod
    def add_catalog_decisions(self, records: Iterable[CatalogDecision]) -> List[CatalogDecision]:
        ...

    @abstractmethod
    def get_catalog_decisions(self, business_id: int) -> List[CatalogDecision]:
        ...

    @abstractmethod
    def add_events(self, events: Iterable[Event]) -> List[Event]:
        ...

    @abstractmethod
    def get_events(self, business_id: int, active_only: bool = False) -> List[Event]:
        ...

    @abstractmethod
    def resolve_event(self, event_id: int) -> Event:
        ...

    @abstractmethod
    def add_financial_record(self, record: FinancialRecord) -> FinancialRecord:
        ...

    @abstractmethod
    def get_financial_records(self, business_id: int) -> List[FinancialRecord]:
        ...

    @abstractmethod
    def add_advice(self, items: Iterable[AdviceItem]) -> List[AdviceItem]:
        ...

    @abstractmethod
    def get_advice(self, business_id: int) -> List[AdviceItem]:
        ...

    @abstractmethod
    def commit_transition(
        self,
        business: BusinessState,
        competitors: Iterable[Competitor] = (),
        decisions: Iterable[Decision] = (),
        updated_decisions: Iterable[Decision] = (),
        events: Iterable[Event] = (),
        advice: Iterable[AdviceItem] = (),
        financial_record: Optional[FinancialRecord] = None,
        catalog_decisions: Iterable[CatalogDecision] = (),
    ) -> CommittedTransition:
        """Store every record produced by one transition together."""
        ...


class InMemoryGameRepository(GameRepository):
    """Dict-backed repository (current implementation). Writes hold one lock."""

    def __init__(self):
        self._lock = threading.RLock()
        self._ids = count(1)
        self._businesses: Dict[int, BusinessState] = {}
        self._competitors: Dict[int, Competitor] = {}
        self._decisions: Dict[int, Decision] = {}
        self._catalog_decisions: Dict[int, CatalogDecision] = {}
        self._events: Dict[int, Event] = {}
        self._records: Dict[int, FinancialRecord] = {}
        self._advice: Dict[int, AdviceItem] = {}

    def _next_id(self) -> int:
        return next(self._ids)

    def _get(self, table: Dict[int, object], kind: str, record_id: int):
        try:
            return table[record_id]
        except KeyError:
            raise RecordNotFoundError(kind, record_id) from None

    # --- Business ---

    def create_business(self, business: BusinessState) -> BusinessState:
        with self._lock:
            stored = replace(business, id=self._next_id())
            self._businesses[stored.id] = stored
            return replace(stored)

    def get_business(self, business_id: int) -> BusinessState:
        return replace(self._get(self._businesses, "Business", business_id))

    def list_businesses(self) -> List[BusinessState]:
        return [replace(b) for b in self._businesses.values()]

    def update_business(self, business: BusinessState) -> BusinessState:
        with self._lock:
            self._get(self._businesses, "Business", business.id)
            self._businesses[business.id] = replace(business)
            return replace(business)

    # --- Competitors ---

    def get_competitors(self, business_id: int) -> List[Competitor]:
        return [replace(c) for c in self._competitors.values() if c.business_id == business_id]

    def save_competitors(self, business_id: int, competitors: Iterable[Competitor]) -> List[Competitor]:
        with self._lock:
            saved = []
            for competitor in competitors:
                record_id = competitor.id if competitor.id is not None else self._next_id()
                stored = replace(competitor, id=record_id, business_id=business_id)
                self._competitors[record_id] = stored
                saved.append(replace(stored))
            return saved

    # --- Decisions ---

    def get_decision(self, decision_id: int) -> Decision:
        return replace(self._get(self._decisions, "Decision", decision_id))

    def get_decisions(self, business_id: int, pending_only: bool = False) -> List[Decision]:
        return [
            replace(d) for d in self._decisions.values()
            if d.business_id == business_id and not (pending_only and d.is_completed)
        ]

    def add_decisions(self, decisions: Iterable[Decision]) -> List[Decision]:
        with self._lock:
            return [self._insert(self._decisions, d) for d in decisions]

    def update_decision(self, decision: Decision) -> Decision:
        with self._lock:
            self._get(self._decisions, "Decision", decision.id)
            self._decisions[decision.id] = replace(decision)
            return replace(decision)

    def add_catalog_decisions(self, records: Iterable[CatalogDecision]) -> List[CatalogDecision]:
        with self._lock:
            return [self._insert(self._catalog_decisions, r) for r in records]

    def get_catalog_decisions(self, business_id: int) -> List[CatalogDecision]:
        return [replace(r) for r in self._catalog_decisions.values() if r.business_id == business_id]

    # --- Events ---

    def add_events(self, events: Iterable[Event]) -> List[Event]:
        with self._lock:
            return [self._insert(self._events, e) for e in events]

    def get_events(self, business_id: int, active_only: bool = False) -> List[Event]:
        return [
            replace(e) for e in self._events.values()
            if e.business_id == business_id and not (active_only and e.resolved)
        ]

    def resolve_event(self, event_id: int) -> Event:
        with self._lock:
            event = replace(self._get(self._events, "Event", event_id), resolved=True)
            self._events[event_id] = event
            return replace(event)

    # --- Financial records & advice ---

    def add_financial_record(self, record: FinancialRecord) -> FinancialRecord:
        with self._lock:
            return self._insert(self._records, record)

    def get_financial_records(self, business_id: int) -> List[FinancialRecord]:
        records = [r for r in self._records.values() if r.business_id == business_id]
        return sorted(records, key=lambda r: (r.year, r.quarter))

    def add_advice(self, items: Iterable[AdviceItem]) -> List[AdviceItem]:
        with self._lock:
            return [self._insert(self._advice, a) for a in items]

    def get_advice(self, business_id: int) -> List[AdviceItem]:
        return [replace(a) for a in self._advice.values() if a.business_id == business_id]

    def _insert(self, table: Dict[int, object], record):
        stored = replace(record, id=self._next_id())
        table[stored.id] = stored
        return replace(stored)

    # --- Transition ---

    def commit_transition(
        self,
        business: BusinessState,
        competitors: Iterable[Competitor] = (),
        decisions: Iterable[Decision] = (),
        updated_decisions: Iterable[Decision] = (),
        events: Iterable[Event] = (),
        advice: Iterable[AdviceItem] = (),
        financial_record: Optional[FinancialRecord] = None,
        catalog_decisions: Iterable[CatalogDecision] = (),
    ) -> CommittedTransition:
        business_id = business.id

        def owned(record):
            return replace(record, business_id=business_id)

        with self._lock:
            self._get(self._businesses, "Business", business_id)
            # Validate before writing so a bad id leaves the store untouched
            updated_decisions = list(updated_decisions)
            for decision in updated_decisions:
                self._get(self._decisions, "Decision", decision.id)

            self._businesses[business_id] = replace(business)
            for decision in updated_decisions:
                self._decisions[decision.id] = replace(decision)

            return CommittedTransition(
                business=replace(business),
                competitors=self.save_competitors(business_id, competitors),
                decisions=self.add_decisions(owned(d) for d in decisions),
                updated_decisions=[replace(d) for d in updated_decisions],
                events=self.add_events(owned(e) for e in events),
                advice=self.add_advice(owned(a) for a in advice),
                financial_record=(
                    self.add_financial_record(owned(financial_record))
                    if financial_record is not None else None
                ),
                catalog_decisions=self.add_catalog_decisions(owned(c) for c in catalog_decisions),
            )
