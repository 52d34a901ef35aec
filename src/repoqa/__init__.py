"""
repoqa - repository cache and navigation toolkit for question-answering agents.
"""

__version__ = "0.1.0"
