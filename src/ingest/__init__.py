"""Location listing ingestion.

This package reads location and administrative-area listings and
applies them to the registry store in file order.
"""
