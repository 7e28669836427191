"""Product workflow package."""
