"""
Scorecard Analysis Backend.

A FastAPI service that extracts provider performance measures from
uploaded healthcare scorecards (PDFs and images) using OpenAI.
"""

__version__ = "1.0.0"
