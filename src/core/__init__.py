"""
Core mathematical primitives, collaborators, and invariants.

This module contains the foundational building blocks the convergence
criteria are built on: bounded arithmetic, sequence limits, sets, topologies,
and measures.
"""
