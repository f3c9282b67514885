"""Offline partner bundle: build, template, save and hand off a deployable node image."""

__version__ = "0.1.0"
