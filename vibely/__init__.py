"""
Vibely - language exchange backend
"""
__version__ = "1.0.0"
