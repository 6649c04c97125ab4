"""Converter state and persistence of the timezone selection."""
