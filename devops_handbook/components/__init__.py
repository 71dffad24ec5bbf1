"""
Component registry for the handbook
This module keeps track of the service classes behind each component.
"""


class ComponentRegistry:
    """Registry for handbook components"""

    def __init__(self):
        self.components = {}

    def register_component(self, name, component_class):
        """Register a component's service class"""
        self.components[name] = component_class

    def get_component(self, name):
        """Get a registered component"""
        return self.components.get(name)

    def get_all_components(self):
        """Get all registered components"""
        return dict(self.components)


# Global registry instance
registry = ComponentRegistry()


def register_component(name):
    """Decorator for registering components"""
    def decorator(component_class):
        registry.register_component(name, component_class)
        return component_class
    return decorator


def get_component_service(name):
    """Service instance that init_* attached to the current Flask app"""
    from flask import current_app
    return current_app.extensions['handbook'][name]


def attach_component_service(app, name, service):
    app.extensions.setdefault('handbook', {})[name] = service
    return service


__all__ = [
    'ComponentRegistry',
    'registry',
    'register_component',
    'get_component_service',
    'attach_component_service'
]
