"""Django project package for the campus feed service."""
