"""Django project package for the WorkTrac notification engine."""
