"""
# Shared tools used by the &fila packages.
"""
