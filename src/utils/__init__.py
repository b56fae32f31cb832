"""
Utilities Module
--------------
Small helpers shared by the clients and view-models: deep-link sanitizing,
date formatting, colour theming, currency/number formatting and search
validation.
"""
