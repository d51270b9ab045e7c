"""
Purchase and settlement of products.
"""
