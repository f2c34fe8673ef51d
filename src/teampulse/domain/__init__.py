"""TeamPulse domain layer.

Pure Python: entities, value objects, the error taxonomy, the Result type
and the ports implemented by infrastructure.
"""
