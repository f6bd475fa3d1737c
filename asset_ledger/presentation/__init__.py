"""
Presentation layer: route blueprints and Jinja templates for the admin screens.
"""
