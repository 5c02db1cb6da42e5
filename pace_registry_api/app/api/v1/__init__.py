"""
Version 1 of the API.

Registration and search of students plus the browser page that uses
them.
"""
