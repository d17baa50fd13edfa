"""Colour sampling of screen regions, widget styles and bulb selection state for ambient lighting."""

__version__ = "0.4.2"