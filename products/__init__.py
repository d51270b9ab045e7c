"""
Products sold under approved licenses.
"""
