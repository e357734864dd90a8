"""CLI helpers: output rendering and form input validation."""
