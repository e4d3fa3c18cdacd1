"""
Utility package: exception hierarchy, error-handling decorators and shared constants.
"""
