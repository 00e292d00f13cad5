"""
LightBnB property rental API.
"""
