"""
Queens Duel - Two-player region-constrained N-Queens engine.

Players alternately place queens on an N×N board split into N regions.
A placement must not share a row, column or diagonal with any queen and
must land in a region without a queen. The player who cannot move loses.

The engine provides:
- Board legality and move generation
- An immutable game state machine
- Move-selection strategies (greedy, minimax, divide-and-conquer)
- Standalone constraint solvers for the whole board
"""

__version__ = "0.1.0"
