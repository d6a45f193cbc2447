"""
Domain package - ORM models, enums, vocabulary tables and schemas.
"""
