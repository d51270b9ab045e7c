"""
Authorization chains: provenance records linking a sold product to its
originating asset and license.
"""
