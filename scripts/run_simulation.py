"""
CLI entry point for a headless multi-quarter run.

Creates a company, then advances it quarter by quarter while resolving
pending decisions with the chosen strategy:
    first        always pick option 1
    random       pick a random option
    recommended  submit the recommended bulk catalog choices instead
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Tuple

from dotenv import load_dotenv

# Ensure project root is in sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

load_dotenv(PROJECT_ROOT / ".env")

import pandas as pd
from tqdm import tqdm

from config import get_settings, setup_logging
from startup_sim.analysis_layer.financial_analyzer import history_frame, summarize_history
from startup_sim.app_layer.game_service import GameService
from startup_sim.data_layer.game_repository import InMemoryGameRepository
from startup_sim.simulation_layer.impact_resolver import CATALOG
from startup_sim.simulation_layer.models import BusinessType, FundingType
from startup_sim.simulation_layer.randomness import SeededRandom, pick
from startup_sim.simulation_layer.recommendations import recommend_choice

logger = logging.getLogger("run_simulation")

STRATEGIES = ["first", "random", "recommended"]


def pick_selections(service: GameService, business_id: int, strategy: str, rng) -> dict:
    """decision_id -> option_id for every pending decision."""
    selections = {}
    for decision in service.repository.get_decisions(business_id, pending_only=True):
        if strategy == "random":
            selections[decision.id] = pick(rng, decision.options).id
        else:
            selections[decision.id] = decision.options[0].id
    return selections


def run(args) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    settings = get_settings()
    seed = args.seed if args.seed is not None else settings.simulation.seed
    rng = SeededRandom(seed)

    service = GameService(InMemoryGameRepository(), settings, rng=rng)
    setup = service.create_company(1, args.name, args.type, args.funding)
    business_id = setup.business.id

    print("=" * 80)
    print(f"{args.name}: {setup.business.business_type.value} / {setup.business.funding_type.value}")
    print("=" * 80)
    print(f"  Seed: {seed}")
    print(f"  Strategy: {args.strategy}")
    print(f"  Competitors: {', '.join(c.name for c in setup.competitors)}")
    print()

    quarter_pbar = tqdm(range(args.quarters), desc="Quarters", unit="quarter")
    for i in quarter_pbar:
        if args.strategy == "recommended":
            business = service.get_business(business_id)
            choices = [(dtype.value, recommend_choice(business, dtype)) for dtype in CATALOG]
            business, _, _ = service.submit_catalog_decisions(business_id, choices)
            logger.info("Catalog choices: %s", ", ".join(f"{t}={c}" for t, c in choices))
        else:
            selections = pick_selections(service, business_id, args.strategy, rng)
            result = service.advance(business_id, selections)
            business = result.business
            for event in result.events:
                tqdm.write(f"    [{event.event_type.value}] {event.title}")

        tqdm.write(
            f"Quarter {i+1}/{args.quarters}: Y{business.current_year}Q{business.current_quarter} "
            f"cash {business.cash:,.0f}, revenue {business.revenue:,.0f}, "
            f"customers {business.customers}, share {business.market_share:.2%}"
        )

    records = service.repository.get_financial_records(business_id)
    return history_frame(records), summarize_history(records)


def main():
    parser = argparse.ArgumentParser(description="Startup Quarter Simulation")
    parser.add_argument(
        "--type",
        default=BusinessType.TECH.value,
        choices=[t.value for t in BusinessType],
        help="Business type (default: Tech)",
    )
    parser.add_argument(
        "--funding",
        default=FundingType.SEED.value,
        choices=[f.value for f in FundingType],
        help="Funding type (default: Seed)",
    )
    parser.add_argument("--name", default="Demo Startup", help="Company name")
    parser.add_argument("--quarters", type=int, default=8, help="Quarters to simulate (default: 8)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: SIM_SEED)")
    parser.add_argument(
        "--strategy",
        default="first",
        choices=STRATEGIES,
        help="How pending decisions are resolved (default: first)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional CSV path for the history table")
    args = parser.parse_args()

    setup_logging()
    history, summary = run(args)

    print()
    print(history[["period", "revenue", "expenses", "profit", "cash", "customers", "market_share"]].to_string(index=False))
    print()
    print(f"Total profit: {summary['total_profit']:,.0f} over {summary['quarters']} records")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        history.to_csv(args.output, index=False, encoding="utf-8-sig")
        print(f"History -> {args.output}")


if __name__ == "__main__":
    main()
