"""
Application Layer Package

Use cases orchestrating the domain services: ingestion into the series
buffers, model input assembly and the periodic scoring cycle.
"""
