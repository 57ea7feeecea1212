"""
Local Food Lovers API: reviews and favorites over MongoDB.
"""
