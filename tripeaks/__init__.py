"""
TriPeaks - Solitaire Engine with Artifact Progression

A deterministic, rules-driven TriPeaks engine. It provides:
- Deck creation, shuffling and the three-peak deal
- Legal move detection and a reducer for plays and draws
- Fragment rewards per finished deal
- Artifact crafting and persisted player progress
"""

__version__ = "0.1.0"
