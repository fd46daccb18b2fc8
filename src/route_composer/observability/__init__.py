"""
route_composer.observability

Observability package (logging + request context).
"""
