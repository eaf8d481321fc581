"""
Application core: context, lifespan and middlewares.
"""
