"""Configuration and logging shared by unitconv modules."""
