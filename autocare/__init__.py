"""
AutoCare workshop operations API.
"""
__version__ = "1.0.0"
