"""
Financial Analyzer - quarter history and leaderboard tables.

Turns stored FinancialRecords and businesses into pandas DataFrames:
1. history_frame: one row per quarter with margin and growth columns
2. summarize_history: totals and the latest runway
3. leaderboard: businesses ranked by profit
"""

from dataclasses import asdict
from typing import Any, Dict, Iterable, List

import pandas as pd

from startup_sim.simulation_layer.models import BusinessState, FinancialRecord

HISTORY_COLUMNS = [
    "year", "quarter", "period", "revenue", "expenses", "profit", "profit_margin",
    "revenue_growth", "cash", "valuation", "customers", "market_share", "employees",
    "marketing_cost", "development_cost", "operations_cost", "hr_cost", "other_costs",
]

LEADERBOARD_COLUMNS = [
    "rank", "id", "name", "business_type", "revenue", "expenses", "profit",
    "valuation", "market_share", "revenue_share",
]


def history_frame(records: Iterable[FinancialRecord]) -> pd.DataFrame:
    """Quarter history sorted by (year, quarter)."""
    df = pd.DataFrame([asdict(r) for r in records])
    if df.empty:
        return pd.DataFrame(columns=HISTORY_COLUMNS)

    df = df.sort_values(["year", "quarter"]).reset_index(drop=True)
    df["period"] = "Y" + df["year"].astype(str) + "Q" + df["quarter"].astype(str)

    revenue = df["revenue"].astype(float)
    df["profit_margin"] = (df["profit"] / revenue.where(revenue != 0)).fillna(0.0)

    prev_revenue = revenue.shift(1)
    growth = (revenue - prev_revenue) / prev_revenue.where(prev_revenue != 0)
    df["revenue_growth"] = growth.fillna(0.0)

    return df[HISTORY_COLUMNS]


def summarize_history(records: Iterable[FinancialRecord]) -> Dict[str, Any]:
    df = history_frame(records)
    if df.empty:
        return {
            "quarters": 0,
            "total_revenue": 0.0,
            "total_expenses": 0.0,
            "total_profit": 0.0,
            "latest_cash": 0.0,
            "runway_quarters": None,
            "profitable_quarters": 0,
        }

    latest = df.iloc[-1]
    burn = float(latest["expenses"] - latest["revenue"])
    runway = float(latest["cash"]) / burn if burn > 0 else None

    return {
        "quarters": int(len(df)),
        "total_revenue": float(df["revenue"].sum()),
        "total_expenses": float(df["expenses"].sum()),
        "total_profit": float(df["profit"].sum()),
        "latest_cash": float(latest["cash"]),
        "runway_quarters": runway,
        "profitable_quarters": int((df["profit"] > 0).sum()),
    }


def leaderboard(businesses: Iterable[BusinessState]) -> pd.DataFrame:
    """Businesses ranked by profit, with each one's share of total revenue in percent."""
    rows: List[Dict[str, Any]] = [
        {
            "id": b.id,
            "name": b.name,
            "business_type": b.business_type.value,
            "revenue": b.revenue,
            "expenses": b.expenses,
            "profit": b.profit,
            "valuation": b.valuation,
            "market_share": b.market_share,
        }
        for b in businesses
    ]
    if not rows:
        return pd.DataFrame(columns=LEADERBOARD_COLUMNS)

    df = pd.DataFrame(rows)
    total_revenue = float(df["revenue"].sum())
    df["revenue_share"] = df["revenue"] / total_revenue * 100 if total_revenue else 0.0

    df = df.sort_values("profit", ascending=False, kind="stable").reset_index(drop=True)
    df["rank"] = df.index + 1
    return df[LEADERBOARD_COLUMNS]
