from .distance_table import load_instance, matrix_to_edges, parse_tsp_dat, read_distance_csv

__all__ = ['load_instance', 'matrix_to_edges', 'parse_tsp_dat', 'read_distance_csv']
