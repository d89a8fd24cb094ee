"""Quaker City Roleplay contraband market backend."""
