"""
Row to row similarity for ternary rating matrices.
"""
