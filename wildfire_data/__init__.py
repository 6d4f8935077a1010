"""
FIRMS Wildfire Data Package

Loading, validation and aggregation of NASA FIRMS fire detection archives.
"""
