"""
Lumen media server backend - storage and hardware codec adapters.
"""
