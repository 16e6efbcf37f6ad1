"""
Report export for computed investment scenarios.
"""
