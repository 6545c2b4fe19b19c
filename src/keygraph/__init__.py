"""
keygraph: graph vertices for element-wise tensor combination.
"""

__version__ = "0.1.0"
