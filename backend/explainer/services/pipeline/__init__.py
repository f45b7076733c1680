"""
Pipeline stages, in execution order:
planning -> audio -> animation -> assembly
"""
