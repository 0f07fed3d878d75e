"""
Test suite for the retail panel split preparation.

Contains unit tests for:
- Settings loading and validation
- Calendar conversions
- Panel completion
- Split generation, summaries, persistence and plots
"""
