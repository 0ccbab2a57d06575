"""
Wordchain - Two-player word-chain game engine

Players take turns naming words that start with the last letter of the
previous word, against a per-turn countdown. The package provides:
- A deterministic rules engine and round/turn state machine
- In-memory game sessions with an async turn ticker
- A REST/WebSocket API and a terminal hot-seat CLI
"""

__version__ = "0.1.0"
