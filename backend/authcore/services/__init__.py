"""Service layer: auth flows plus the shared errors, ports and base class.

Import concrete services from their subpackages, e.g.
``from authcore.services.auth import AuthService``.
"""
