"""
Cadena - Chain Combo Card Game Engine

An authoritative, deterministic engine for the turn-based card game where
players build a shared combo of START, EXTENSION and END cards. Provides:
- State management and a single-point reducer
- Move validation and scoring against secret objectives
- Computer players at three difficulty tiers
- Session handling and an HTTP/WebSocket adapter
"""

__version__ = "0.1.0"
