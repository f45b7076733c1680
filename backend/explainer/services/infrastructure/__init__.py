"""
Infrastructure services: LLM access, response parsing, scratch storage.
"""
