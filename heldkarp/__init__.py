"""Exact TSP on small directed cost matrices with the Held-Karp dynamic program."""

from .dp import (INF, cities_to_mask, held_karp, mask_to_cities, tour_cost,
                 tsp_cost, tsp_cost_iterative, tsp_path)
from .matrix import AdjacencyMatrix, MatrixFormatError, read_matrix_file

__version__ = "1.0.0"
