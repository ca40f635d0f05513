"""
schema.org JSON-LD graph builders and the API that serves them.
"""
