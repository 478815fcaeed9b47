"""
Farm calculators: deterministic calculation engine.

Pure Python math. No database, no network.
Each calculator takes a flat dict of validated form fields and returns a flat
result dict that the routers serialize as-is.
"""
