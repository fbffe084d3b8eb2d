"""
API request, response and error models.
"""
