"""
Configuration, preferences, logging and file helpers.
"""
