"""
FeatureSmith - AI-generated Gherkin feature files with quality and complexity scoring.
"""

__version__ = "0.1.0"
