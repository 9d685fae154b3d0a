"""
Crease - delivery-by-delivery cricket match simulation
"""
__version__ = "0.1.0"
