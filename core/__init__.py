"""Core application of the WorkTrac notification engine."""
