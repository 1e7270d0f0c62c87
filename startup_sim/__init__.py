"""
Startup quarter simulator.

Layers:
- simulation_layer: quarter engine, decisions, events, advice
- data_layer: game state repository
- analysis_layer: pandas history and leaderboard tables
- app_layer: FastAPI service
"""
