"""WordPress-like hook/filter system for customizing rendered forms.

Rendering is synchronous, so unlike request-time hook systems every callback
registered here is a plain function.

Actions: Execute callbacks without modifying a value (side effects)
Filters: Execute callbacks that can modify a value (transformations)

Hooks applied by the renderers:
    action_label           (text)                - translate button labels
    field_rendered         (markup, field)       - post-process one field
    form_rendered          (markup, form_name)   - post-process any form
    form_<name>_rendered   (markup)              - post-process one named form

Usage:
    from formsmith.lib.hooks import hooks, filter

    @filter("action_label")
    def translate(text):
        return gettext(text)

    hooks.add_action("form_rendering", lambda form_id: seen.add(form_id))
"""

from collections import defaultdict
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, TypeVar

T = TypeVar("T")

@dataclass(order=True)
class HookHandler:
    """A registered hook handler with priority."""

    priority: int
    callback: Callable = field(compare=False)

    def call(self, *args: Any, **kwargs: Any) -> Any:
        return self.callback(*args, **kwargs)


class HookRegistry:
    """Central registry for all hooks (actions and filters)."""

    def __init__(self) -> None:
        self._actions: dict[str, list[HookHandler]] = defaultdict(list)
        self._filters: dict[str, list[HookHandler]] = defaultdict(list)

    def add_action(
        self,
        hook_name: str,
        callback: Callable[..., Any],
        priority: int = 10,
    ) -> None:
        """Register an action callback.

        Args:
            hook_name: Name of the action hook
            callback: Function to call when action is triggered
            priority: Lower numbers execute first (default: 10)
        """
        handler = HookHandler(priority=priority, callback=callback)
        self._actions[hook_name].append(handler)
        self._actions[hook_name].sort()

    def add_filter(
        self,
        hook_name: str,
        callback: Callable[..., T],
        priority: int = 10,
    ) -> None:
        """Register a filter callback.

        Args:
            hook_name: Name of the filter hook
            callback: Function to call to modify value
            priority: Lower numbers execute first (default: 10)
        """
        handler = HookHandler(priority=priority, callback=callback)
        self._filters[hook_name].append(handler)
        self._filters[hook_name].sort()

    def remove_action(self, hook_name: str, callback: Callable[..., Any]) -> bool:
        """Remove an action callback. Returns True if it was registered."""
        return self._remove(self._actions, hook_name, callback)

    def remove_filter(self, hook_name: str, callback: Callable[..., Any]) -> bool:
        """Remove a filter callback. Returns True if it was registered."""
        return self._remove(self._filters, hook_name, callback)

    @staticmethod
    def _remove(table: dict[str, list[HookHandler]], hook_name: str, callback) -> bool:
        handlers = table.get(hook_name, [])
        for i, handler in enumerate(handlers):
            if handler.callback is callback:
                handlers.pop(i)
                return True
        return False

    def has_action(self, hook_name: str) -> bool:
        return bool(self._actions.get(hook_name))

    def has_filter(self, hook_name: str) -> bool:
        return bool(self._filters.get(hook_name))

    def do_action(self, hook_name: str, *args: Any, **kwargs: Any) -> None:
        """Execute all registered action callbacks in priority order."""
        for handler in self._actions.get(hook_name, []):
            handler.call(*args, **kwargs)

    def apply_filters(self, hook_name: str, value: T, *args: Any, **kwargs: Any) -> T:
        """Apply all registered filter callbacks to a value.

        Args:
            hook_name: Name of the filter hook
            value: Initial value to filter
            *args: Additional positional arguments to pass to callbacks
            **kwargs: Keyword arguments to pass to callbacks

        Returns:
            The filtered value after all callbacks have been applied
        """
        for handler in self._filters.get(hook_name, []):
            value = handler.call(value, *args, **kwargs)
        return value

    def clear(self) -> None:
        """Clear all registered hooks. Useful for testing."""
        self._actions.clear()
        self._filters.clear()


# Global singleton registry
hooks = HookRegistry()


def add_action(hook_name: str, callback: Callable[..., Any], priority: int = 10) -> None:
    """Register an action callback to the global registry."""
    hooks.add_action(hook_name, callback, priority)


def add_filter(hook_name: str, callback: Callable[..., T], priority: int = 10) -> None:
    """Register a filter callback to the global registry."""
    hooks.add_filter(hook_name, callback, priority)


def remove_action(hook_name: str, callback: Callable[..., Any]) -> bool:
    return hooks.remove_action(hook_name, callback)


def remove_filter(hook_name: str, callback: Callable[..., Any]) -> bool:
    return hooks.remove_filter(hook_name, callback)


def do_action(hook_name: str, *args: Any, **kwargs: Any) -> None:
    hooks.do_action(hook_name, *args, **kwargs)


def apply_filters(hook_name: str, value: T, *args: Any, **kwargs: Any) -> T:
    return hooks.apply_filters(hook_name, value, *args, **kwargs)


# Decorator factories for auto-registration
def action(hook_name: str, priority: int = 10) -> Callable[[Callable], Callable]:
    """Decorator to register a function as an action handler.

    Usage:
        @action("form_rendering", priority=5)
        def track(form_id):
            ...
    """

    def decorator(func: Callable) -> Callable:
        hooks.add_action(hook_name, func, priority)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return func(*args, **kwargs)

        return wrapper

    return decorator


def filter(hook_name: str, priority: int = 10) -> Callable[[Callable], Callable]:
    """Decorator to register a function as a filter handler.

    Usage:
        @filter("action_label", priority=5)
        def shout(text):
            return text.upper()
    """

    def decorator(func: Callable) -> Callable:
        hooks.add_filter(hook_name, func, priority)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return func(*args, **kwargs)

        return wrapper

    return decorator


# Define standard hook names as constants for discoverability
# Actions
FORM_RENDERING = "form_rendering"

# Filters
ACTION_LABEL = "action_label"
FIELD_RENDERED = "field_rendered"
FORM_RENDERED = "form_rendered"


def form_rendered_hook(form_name: str) -> str:
    """Name of the filter applied to one named form's markup."""
    return f"form_{form_name}_rendered"
