"""
Entry point for running researchbot as a module: python -m researchbot
"""

from researchbot.cli.commands import app

if __name__ == "__main__":
    app()
