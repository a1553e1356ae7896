"""API Resilience Implementations.

Contains the rate limiters that throttle outbound calls. Nothing here retries.
"""
