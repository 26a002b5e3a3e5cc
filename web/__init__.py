"""
Web application package for the hexbot engine.

Provides a FastAPI REST API that replays a move record and returns the
engine's reply.
"""
