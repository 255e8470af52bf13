"""
Alphadeduce: recover an unknown alphabet from a list of sorted words.

The sort order of the words encodes pairwise precedence between symbols;
alphadeduce collects that evidence into a precedence graph and linearizes it,
or reports why the evidence is insufficient or contradictory.
"""

__version__ = "0.1.0"
