"""
Layout models, geometry helpers, configuration and batch recompute
"""
