"""Service layer: compilation, resolution, and the validation pipeline.

Services may import from domain and config.
They must never import from commands or output.
"""
