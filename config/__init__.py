"""Service configuration package.

Main components:
- config.py: AppConfig dataclasses and new_config()
- service.py: Facade for simplified configuration access
"""
