"""Municipal election results scraper: fetch, flatten, validate, and export."""

__version__ = "0.1.0"
