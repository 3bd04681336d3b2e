"""HR Portal package.

Organized by feature modules (users, attendance, reports) with a thin Flask
controller layer over service/repository layers backed by MongoDB.
"""
