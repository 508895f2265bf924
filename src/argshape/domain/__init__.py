"""Domain layer: type capability, rules, and the pattern grammar.

This layer depends only on the standard library and argshape.errors.
It must never import from services, config, commands, or output.
"""
