"""
Core modules for Anticafe.

This package contains the core functionality for table occupancy,
per-minute billing, and visit statistics.
"""
