"""
thermal_heatmap
===================
Live heat map for a 4x4 USB-serial thermal sensor grid.
"""
