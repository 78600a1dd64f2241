"""Section generators for the five document templates."""
