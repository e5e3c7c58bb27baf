"""
harkit - turn captured HTTP exchanges into developer-usable artifacts.

Reads HAR entries (as produced by browser network inspection) and produces
equivalent curl/fetch/axios code, cleaned response summaries, and a
page-to-API map with inferred JSON schemas.
"""

__version__ = "0.1.0"
