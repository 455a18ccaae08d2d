"""
Lambda handlers for the trade journal import API.
"""
