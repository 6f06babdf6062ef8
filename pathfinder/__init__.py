"""
Pathfinder

Deterministic study-abroad path engine with an optional AI narrative layer.
"""
