"""
termkey - on-screen display of keyboard and mouse input for the terminal
"""

__version__ = "1.0.0"
