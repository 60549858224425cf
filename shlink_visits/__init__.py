"""
Read access to Shlink visits: keyset sweeps and paged listings
"""
