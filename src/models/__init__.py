"""
Data Models Module
----------------
Contains Pydantic models for data validation and serialization.
Defines the payloads exchanged with the flight, hotel, rental, ads, profile
and user endpoints, with JSON key aliases where the API naming differs.
"""
