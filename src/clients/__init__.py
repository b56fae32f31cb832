"""
API Clients Module

Thin wrappers over the flight, hotel, rental, ads, profile and user backends.
Each call makes exactly one request through the shared ``NetworkManager``.
"""
