"""
Presentation Layer Package

HTTP controllers and their request/response handling.
"""
