"""Reversi engine: rules, search, game session and turn orchestration."""
