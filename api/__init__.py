"""API package - FastAPI routes, dependencies and middleware"""
