from .disjoint_set import DisjointSetForest
from .greedy_edge import MODES, Edge, check_mode, construct, sort_edges
from .solver import TourResult, compute_greedy_tour, solve_request
from .tour_assembly import StepDetail, assemble_path, summarize

__all__ = [
    'DisjointSetForest', 'MODES', 'Edge', 'check_mode', 'construct', 'sort_edges',
    'TourResult', 'compute_greedy_tour', 'solve_request', 'StepDetail', 'assemble_path', 'summarize',
]
