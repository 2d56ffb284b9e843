"""Multilevel Parking System: first-fit allocation and hourly billing across floors"""

__version__ = "1.0.0"
