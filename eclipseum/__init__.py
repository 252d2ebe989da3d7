"""
Eclipseum: a two-pool exchange for the ECL token.
"""

__version__ = "0.1.0"
