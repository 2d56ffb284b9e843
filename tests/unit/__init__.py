"""Unit tests for the Multilevel Parking System"""
