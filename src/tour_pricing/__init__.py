"""
Tour Pricing Package

Catalog manager and pricing calculator for guided-tour operators.
Prices packages using Routes → Unit Costs → Profit Margin with
secondary-currency display amounts.
"""

__version__ = "1.1.0"
