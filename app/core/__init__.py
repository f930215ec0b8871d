"""
Core building blocks shared by every domain: settings-driven app factory,
lifecycle, DDD base classes and repository interfaces.
"""
