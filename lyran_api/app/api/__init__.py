"""
API package containing versioned routes.

``deps`` exposes the dependencies shared by every version.
"""
