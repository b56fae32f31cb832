"""
View Models Module

UI-state holders that validate input, call the API clients and publish
loading, result and error state to subscribers.
"""
