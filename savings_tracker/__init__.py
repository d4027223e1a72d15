"""
Savings Tracker - Source Package

Tracks how much money has been saved since a chosen start moment at a
fixed daily rate, net of any "treats" logged against those savings.

DESIGN PRINCIPLES:
1. Savings are always recomputed from the clock, never accumulated
2. A treat can only be logged if the savings already cover it
3. Storage is an injected key-value store
4. Time and timers are injected so they can be simulated
"""

__version__ = "1.0.0"
__author__ = "Savings Tracker Team"
