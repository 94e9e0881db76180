"""
Gallery errors. They subclass the DRF exceptions so views can raise them
directly and get the right status code.
"""
from rest_framework import exceptions


class ComponentNotFound(exceptions.NotFound):
    default_detail = 'Component not found'


class NotComponentOwner(exceptions.PermissionDenied):
    default_detail = 'You do not have permission to modify this component'


class ComponentValidationError(exceptions.ValidationError):
    pass


class AuthenticationRequired(exceptions.NotAuthenticated):
    default_detail = 'You must be signed in to do this'
