"""Infrastructure adapters: logging and database connectivity."""
