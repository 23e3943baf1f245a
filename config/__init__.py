"""Configuration for Course Builder."""
