"""
Web application package for the checkers game.

Provides a FastAPI-based JSON API and a static browser frontend for two
players sharing one screen. Deployable to Render.com via Procfile.
"""
