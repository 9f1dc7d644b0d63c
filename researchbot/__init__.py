"""
researchbot - search the web and summarize what was found.
"""

__version__ = "0.1.0"
__logo__ = "🔎"
