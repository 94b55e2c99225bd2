"""Role-based task tracking board."""
