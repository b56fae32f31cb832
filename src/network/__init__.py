"""
Network Module
-------------
Handles HTTP communication with the travel search backends.
Provides the generic request wrapper, the error set surfaced to view-models,
endpoint constants and a simple reachability monitor.
"""
