"""Services - persistence and export built on the domain commands."""
