"""
API Module
---------
Provides a local RESTful facade over the travel search view-models using FastAPI.
Features include:
- Location autocomplete
- Flight search sessions and filtered result polling
- Hotel and car rental deep links
- Country, currency and recent location lookups
"""
