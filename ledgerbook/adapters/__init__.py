"""Adapters wiring use cases to CLIs and the presentation layer."""
