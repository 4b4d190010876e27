"""
Core services — home-manager capability handling and template generators.
"""
