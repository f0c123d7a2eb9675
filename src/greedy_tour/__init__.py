"""Greedy degree-constrained edge heuristic for shortest/longest tours."""
from .dispatch import TourDispatcher, solve_modes
from .tsp import MODES, Edge, TourResult, compute_greedy_tour

__version__ = '0.1.0'

__all__ = ['MODES', 'Edge', 'TourResult', 'compute_greedy_tour', 'TourDispatcher', 'solve_modes']
