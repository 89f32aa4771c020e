"""Invoice persistence and form handling services."""
