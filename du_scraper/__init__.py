"""DU Scraper - University of Denver public page harvester.

This package scrapes athletics schedules, calendar events and bulletin course
listings from public University of Denver pages, producing normalized JSON
files.
"""

__version__ = "0.1.0"
