"""Operator scripts - data and schema migrations, database initialization"""
