"""
SME Grant Matcher
=================

Reads grant-program PDFs from a local folder, extracts structured details
from each with an LLM, and ranks the grants against an SME business profile.
"""

__version__ = "0.1.0"
