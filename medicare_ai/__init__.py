"""
MediCare+ AI - rule-based clinical decision support for the hospital dashboards.
"""
__version__ = "1.0.0"
