"""Bundled API description resources."""
