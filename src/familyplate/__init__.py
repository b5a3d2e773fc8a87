"""FamilyPlate: consolidated shopping lists from family meal plans."""

__version__ = "0.1.0"
